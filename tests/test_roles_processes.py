"""
Tests for company-scoped roles and processes.
"""


def test_create_and_list_roles(client, admin_headers):
    client.post("/roles", json={"title": "Accountant"}, headers=admin_headers)
    client.post("/roles", json={"title": "Controller"}, headers=admin_headers)

    response = client.get("/roles", headers=admin_headers)

    assert response.status_code == 200
    titles = [role["title"] for role in response.json()]
    assert sorted(titles) == ["Accountant", "Controller"]
    # newest first
    assert titles[0] == "Controller"


def test_duplicate_role_title_conflicts(client, admin_headers):
    client.post("/roles", json={"title": "Accountant"}, headers=admin_headers)

    response = client.post("/roles", json={"title": "Accountant"}, headers=admin_headers)

    assert response.status_code == 409


def test_same_role_title_allowed_in_other_company(client, admin_headers, other_company_headers):
    first = client.post("/roles", json={"title": "Accountant"}, headers=admin_headers)
    second = client.post("/roles", json={"title": "Accountant"}, headers=other_company_headers)

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["company_id"] != second.json()["company_id"]


def test_roles_are_company_scoped(client, role, other_company_headers):
    response = client.get("/roles", headers=other_company_headers)

    assert response.status_code == 200
    assert response.json() == []


def test_create_role_missing_title(client, admin_headers):
    response = client.post("/roles", json={"description": "no title"}, headers=admin_headers)

    assert response.status_code == 400


def test_create_process_generates_missing_question_ids(client, admin_headers):
    response = client.post(
        "/processes",
        json={"title": "Onboarding", "questions": [{"text": "What do you do first?"}]},
        headers=admin_headers,
    )

    assert response.status_code == 201
    question = response.json()["questions"][0]
    assert question["id"]
    assert question["text"] == "What do you do first?"
    assert question["required"] is False


def test_get_process(client, admin_headers, process):
    response = client.get(f"/processes/{process['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["title"] == "Month-end close"
    assert {q["id"] for q in response.json()["questions"]} == {"q1", "q2"}


def test_process_invisible_to_other_company(client, process, other_company_headers):
    get_response = client.get(f"/processes/{process['id']}", headers=other_company_headers)
    put_response = client.put(
        f"/processes/{process['id']}", json={"title": "Hijacked"}, headers=other_company_headers
    )
    delete_response = client.delete(f"/processes/{process['id']}", headers=other_company_headers)

    assert get_response.status_code == 404
    assert put_response.status_code == 404
    assert delete_response.status_code == 404
    assert client.get("/processes", headers=other_company_headers).json() == []


def test_update_process_replaces_questions(client, admin_headers, process):
    response = client.put(
        f"/processes/{process['id']}",
        json={"questions": [{"id": "q9", "text": "Anything else?", "order": 1}]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Month-end close"
    assert [q["id"] for q in data["questions"]] == ["q9"]


def test_update_process_partial_keeps_questions(client, admin_headers, process):
    response = client.put(
        f"/processes/{process['id']}",
        json={"description": "Updated"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["description"] == "Updated"
    assert len(response.json()["questions"]) == 2


def test_update_process_rejects_null_title(client, admin_headers, process):
    response = client.put(f"/processes/{process['id']}", json={"title": None}, headers=admin_headers)

    assert response.status_code == 400


def test_delete_unused_process(client, admin_headers, process):
    response = client.delete(f"/processes/{process['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/processes/{process['id']}", headers=admin_headers).status_code == 404


def test_delete_process_in_use_conflicts(client, admin_headers, process, session):
    response = client.delete(f"/processes/{process['id']}", headers=admin_headers)

    assert response.status_code == 409
    assert client.get(f"/processes/{process['id']}", headers=admin_headers).status_code == 200


def test_update_process_rejects_null_questions(client, admin_headers, process):
    response = client.put(f"/processes/{process['id']}", json={"questions": None}, headers=admin_headers)

    assert response.status_code == 400
    stored = client.get(f"/processes/{process['id']}", headers=admin_headers).json()
    assert len(stored["questions"]) == 2


def test_update_process_empty_list_clears_questions(client, admin_headers, process):
    response = client.put(f"/processes/{process['id']}", json={"questions": []}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["questions"] == []
