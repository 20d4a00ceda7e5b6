import pytest

@pytest.mark.asyncio
@pytest.mark.integration
async def test_liveness(client, settings):
	resp = await client.get(f'{settings.api_prefix}/health/liveness')
	assert resp.status_code == 200
	assert resp.json() == {"status": "ok"}

@pytest.mark.asyncio
@pytest.mark.integration
async def test_readiness_reports_user_count(client, settings):
	resp = await client.get(f'{settings.api_prefix}/health/readiness')
	assert resp.status_code == 200
	assert resp.json() == {"status": "ready", "users": 0}
	await client.post(f'{settings.api_prefix}/users/', json={"name": "Ann", "email": "ann@example.com"})
	resp = await client.get(f'{settings.api_prefix}/health/readiness')
	assert resp.json() == {"status": "ready", "users": 1}
