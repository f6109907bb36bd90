# tests/test_categories.py


def test_create_and_list_categories(client, auth, users):
    staff = auth(users["support"])
    r = client.post("/api/categories", json={"name": "Rede", "priority": "alta", "sla_time": 8}, headers=staff)
    assert r.status_code == 201
    created = r.json()
    assert created["is_active"] is True
    assert created["sla_time"] == 8

    r = client.post("/api/categories", json={"name": "Acesso"}, headers=staff)
    assert r.json()["priority"] == "média"
    assert r.json()["sla_time"] == 24

    # any authenticated user may list, sorted by name
    r = client.get("/api/categories", headers=auth(users["requester"]))
    assert r.status_code == 200
    assert [c["name"] for c in r.json()["categories"]] == ["Acesso", "Rede"]

    r = client.get(f"/api/categories/{created['id']}", headers=auth(users["requester"]))
    assert r.json()["name"] == "Rede"


def test_plain_user_cannot_write_categories(client, auth, users, make_category):
    cat = make_category()
    headers = auth(users["requester"])
    assert client.post("/api/categories", json={"name": "X"}, headers=headers).status_code == 403
    assert client.put(f"/api/categories/{cat.id}", json={"name": "Y"}, headers=headers).status_code == 403


def test_duplicate_names_are_rejected(client, auth, users, make_category):
    make_category(name="Rede")
    other = make_category(name="Software")
    staff = auth(users["admin"])

    r = client.post("/api/categories", json={"name": "Rede"}, headers=staff)
    assert r.status_code == 400

    r = client.put(f"/api/categories/{other.id}", json={"name": "Rede"}, headers=staff)
    assert r.status_code == 400

    # renaming to its own name is fine
    r = client.put(f"/api/categories/{other.id}", json={"name": "Software", "sla_time": 12}, headers=staff)
    assert r.status_code == 200
    assert r.json()["sla_time"] == 12


def test_names_are_trimmed_before_uniqueness_check(client, auth, users, make_category):
    make_category(name="Rede")
    staff = auth(users["admin"])

    r = client.post("/api/categories", json={"name": "Rede "}, headers=staff)
    assert r.status_code == 400

    r = client.post("/api/categories", json={"name": "  Hardware ", "description": " Desktops "}, headers=staff)
    assert r.status_code == 201
    assert r.json()["name"] == "Hardware"
    assert r.json()["description"] == "Desktops"

    assert client.post("/api/categories", json={"name": "   "}, headers=staff).status_code == 422


def test_filters(client, auth, users, make_category):
    make_category(name="Rede", priority="alta")
    make_category(name="Legacy", priority="baixa", is_active=False)
    headers = auth(users["requester"])

    r = client.get("/api/categories?is_active=false", headers=headers)
    assert [c["name"] for c in r.json()["categories"]] == ["Legacy"]
    r = client.get("/api/categories?priority=alta", headers=headers)
    assert [c["name"] for c in r.json()["categories"]] == ["Rede"]


def test_update_deactivates(client, auth, users, make_category):
    cat = make_category()
    r = client.put(f"/api/categories/{cat.id}", json={"is_active": False}, headers=auth(users["support"]))
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    assert r.json()["name"] == "Rede"


def test_delete_is_admin_only(client, auth, users, make_category):
    cat = make_category()
    assert client.delete(f"/api/categories/{cat.id}", headers=auth(users["support"])).status_code == 403
    assert client.delete(f"/api/categories/{cat.id}", headers=auth(users["admin"])).status_code == 200
    assert client.get(f"/api/categories/{cat.id}", headers=auth(users["admin"])).status_code == 404
    assert client.delete(f"/api/categories/{cat.id}", headers=auth(users["admin"])).status_code == 404
