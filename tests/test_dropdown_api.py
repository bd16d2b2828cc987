BASE = "/api/dropdowns"


def _create(client, category="TASK", subcategory="CLIENT", value="Acme"):
    return client.post(BASE, json={"category": category, "subcategory": subcategory, "itemValue": value})


def test_admin_creates_value(admin_client):
    response = _create(admin_client, category="task", value="Acme")

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "TASK"
    assert body["itemValue"] == "Acme"
    assert body["displayOrder"] == 1
    assert body["isActive"] is True


def test_duplicate_create_is_400(admin_client):
    _create(admin_client)
    response = _create(admin_client, value="acme")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_update_and_delete(admin_client):
    value_id = _create(admin_client).json()["id"]

    response = admin_client.put(
        f"{BASE}/{value_id}",
        json={"itemValue": "Acme Corp", "displayOrder": 3, "isActive": False},
    )
    assert response.status_code == 200
    assert response.json()["itemValue"] == "Acme Corp"
    assert response.json()["isActive"] is False

    response = admin_client.delete(f"{BASE}/{value_id}")
    assert response.status_code == 200
    assert response.content == b""

    assert admin_client.get(f"{BASE}/all").json() == []


def test_unknown_id_is_404(admin_client):
    assert admin_client.put(f"{BASE}/42", json={"itemValue": "x"}).status_code == 404
    assert admin_client.delete(f"{BASE}/42").status_code == 404


def test_reads_for_any_signed_in_user(dropdown_service, user_client):
    dropdown_service.create_dropdown_value("TASK", "PHASE", "Design")
    dropdown_service.create_dropdown_value("EXPENSE", "VENDOR", "Airline")
    dropdown_service.create_dropdown_value("EXPENSE", "PAYMENT_METHOD", "Card")

    assert user_client.get(f"{BASE}/categories").json() == ["EXPENSE", "TASK"]
    assert [v["itemValue"] for v in user_client.get(f"{BASE}/phases").json()] == ["Design"]
    assert [v["itemValue"] for v in user_client.get(f"{BASE}/vendors").json()] == ["Airline"]
    assert [v["itemValue"] for v in user_client.get(f"{BASE}/payment-methods").json()] == ["Card"]
    assert user_client.get(f"{BASE}/currencies").json() == []
    assert user_client.get(f"{BASE}/expense-types").json() == []
    assert len(user_client.get(f"{BASE}/category/expense").json()) == 2


def test_clients_filtered_for_regular_user(dropdown_service, user_client):
    dropdown_service.create_dropdown_value("TASK", "CLIENT", "Acme")

    assert user_client.get(f"{BASE}/clients").json() == []
    assert user_client.get(f"{BASE}/projects").json() == []


def test_regular_user_cannot_mutate(user_client):
    response = _create(user_client)

    assert response.status_code == 403
    assert response.json()["error"] == "Access Denied"


def test_anonymous_read_is_401(client):
    assert client.get(f"{BASE}/all").status_code == 401
