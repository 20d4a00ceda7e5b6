import pytest

async def _create(client, **overrides):
	payload = {"name": "Old", "email": "old@example.com", "imageUri": "http://img/old.png", "roles": ["editor"]}
	payload.update(overrides)
	r = await client.post('/api/v1/users/', json=payload)
	assert r.status_code == 201
	return r.json()['createdUser']

@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_user_partial(client):
	user = await _create(client)
	patch = await client.patch(f"/api/v1/users/{user['id']}", json={"name": "New"})
	assert patch.status_code == 200
	edited = patch.json()['editedUser']
	assert edited['name'] == 'New'
	# untouched fields keep their values, roles included
	assert edited['email'] == 'old@example.com'
	assert edited['imageUri'] == 'http://img/old.png'
	assert edited['roles'] == ['editor']

@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_user_replaces_roles_when_sent(client):
	user = await _create(client)
	patch = await client.patch(f"/api/v1/users/{user['id']}", json={"roles": ["admin"]})
	assert patch.json()['editedUser']['roles'] == ['admin']
	cleared = await client.patch(f"/api/v1/users/{user['id']}", json={"roles": []})
	assert cleared.json()['editedUser']['roles'] == []

@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_user_email_conflict(client):
	await _create(client, email="first@example.com")
	second = await _create(client, email="second@example.com")
	conflict = await client.patch(f"/api/v1/users/{second['id']}", json={"email": "first@example.com"})
	assert conflict.status_code == 409

@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_user_invalid_id(client):
	resp = await client.patch('/api/v1/users/123', json={"name": "x"})
	assert resp.status_code == 422
	assert resp.json()['detail'] == 'Not a valid UUID'
