"""Health Routes — liveness and readiness probes."""


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_db_and_media_root(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy", "media_root": "healthy"}


async def test_readiness_fails_without_media_root(client, media_root):
    from melodyhub.api.dependencies import get_media_library
    from melodyhub.infrastructure.media_library import MediaLibrary
    from melodyhub.main import app

    app.dependency_overrides[get_media_library] = lambda: MediaLibrary(media_root / "gone")
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["checks"]["media_root"] == "missing"
