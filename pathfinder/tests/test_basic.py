import pytest


@pytest.mark.asyncio
async def test_home_page_anonymous(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert "PathFinder AI" in response.text
    assert "/signup" in response.text


@pytest.mark.asyncio
async def test_home_page_logged_in_shows_level(auth_client):
    response = await auth_client.get("/")
    assert response.status_code == 200
    assert "Level 1" in response.text


@pytest.mark.asyncio
async def test_security_headers(client):
    response = await client.get("/login")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_custom_404_page(client):
    response = await client.get("/does-not-exist")
    assert response.status_code == 404
    assert "This page doesn't exist" in response.text


@pytest.mark.asyncio
async def test_unknown_api_route_is_json_404(client):
    response = await client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_static_chat_script_is_served(client):
    response = await client.get("/static/chat.js")
    assert response.status_code == 200
    assert "data: " in response.text


@pytest.mark.asyncio
async def test_chat_script_locks_input_and_chips_while_busy(client):
    script = (await client.get("/static/chat.js")).text

    assert "input.disabled = value;" in script
    assert "chip.disabled = value;" in script
    # the typed text is only cleared once a send is accepted
    assert script.index("if (busy || !input.value.trim()) return;") < script.index('input.value = "";')
