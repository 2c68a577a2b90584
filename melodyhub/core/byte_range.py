"""Byte Ranges — Range header checks ahead of Starlette's FileResponse.

Invariants:
    - FileResponse serves the body for every header this module accepts
      (200 without Range, 206 for one range, multipart/byteranges for several)
    - Rejections follow FileResponse's own rules, so a header that reaches it
      is never rejected there: non-bytes units or no usable range → 400
      InvalidRangeError; a range starting at or past the end → 416
      RangeNotSatisfiableError with Content-Range: bytes */size
    - Returned ranges are inclusive (start, end), clamped to the file, in
      header order

Design Decisions:
    - Checked here instead of inside FileResponse so failures carry the
      structured JSON error body like every other API error
    - Parts that are empty, a lone '-', or not numeric are skipped, the same
      way FileResponse skips them
"""

from melodyhub.core.errors import InvalidRangeError, RangeNotSatisfiableError


MAX_RANGES: int = 100  # FileResponse.max_ranges: above this the full body is sent


def parse_range_header(header: str | None, size: int) -> list[tuple[int, int]] | None:
    """Ranges a request asks for, or None when the full body will be sent."""
    if header is None:
        return None
    unit, sep, spec = header.partition("=")
    if not sep or unit.strip().lower() != "bytes":
        raise InvalidRangeError(header)
    if spec.count(",") + 1 > MAX_RANGES:
        return None

    ranges = [r for r in (_parse_part(part, size) for part in spec.split(",")) if r]
    if not ranges:
        raise InvalidRangeError(header)
    if any(not 0 <= start < size for start, _ in ranges):
        raise RangeNotSatisfiableError(size)
    if any(start > end for start, end in ranges):
        raise InvalidRangeError(header)
    return ranges


def _parse_part(part: str, size: int) -> tuple[int, int] | None:
    part = part.strip()
    if not part or part == "-" or "-" not in part:
        return None
    first, _, last = part.partition("-")
    first, last = first.strip(), last.strip()
    try:
        if not first:
            # suffix range: the final N bytes
            return max(size - int(last), 0), size - 1
        start = int(first)
        end = min(int(last), size - 1) if last else size - 1
    except ValueError:
        return None
    return start, end
