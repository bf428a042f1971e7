"""
Help requests API tests.

Validates:
- Every route requires a bearer token
- Create/fetch/update round trip with camelCase JSON
- Article PUT/DELETE walkthrough (one row per article, idempotent delete)
- Filter query strings: bare vs bracketed arrays, 'me', includeRequester
- Error mapping to 400/404
"""

import pytest


def _create(client, headers, **body):
    payload = {"zipCode": "10115", **body}
    response = client.post("/help-requests", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _ids(response):
    assert response.status_code == 200, response.text
    return [item["id"] for item in response.json()]


@pytest.mark.parametrize("method, path", [
    ("get", "/help-requests"),
    ("post", "/help-requests"),
    ("get", "/help-requests/1"),
    ("put", "/help-requests/1"),
    ("put", "/help-requests/1/article/7"),
    ("delete", "/help-requests/1/article/7"),
    ("get", "/articles"),
])
def test_routes_require_token(client, method, path):
    response = client.request(method, path, json={})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_invalid_token_rejected(client):
    response = client.get("/help-requests", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401


def test_health_needs_no_token(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_create_and_fetch(client, auth_headers, users, articles):
    created = _create(
        client, auth_headers,
        city="Berlin",
        articles=[{"articleId": 7, "amount": 2}],
    )

    assert created["requesterUserId"] == users[0].id
    assert created["status"] == "OPEN"
    assert created["city"] == "Berlin"
    assert created["requester"] is None
    assert created["articles"] == [{
        "articleId": 7,
        "amount": 2,
        "article": {"id": 7, "name": "Milch (1 l)", "language": "de"},
    }]

    fetched = client.get(f"/help-requests/{created['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_create_ignores_requester_in_body(client, auth_headers, users, articles):
    created = _create(client, auth_headers, requesterUserId=users[1].id)
    assert created["requesterUserId"] == users[0].id


def test_article_walkthrough(client, auth_headers, articles):
    created = _create(client, auth_headers, status="OPEN")
    base = f"/help-requests/{created['id']}"

    def amounts():
        response = client.get(base, headers=auth_headers)
        return [(line["articleId"], line["amount"]) for line in response.json()["articles"]]

    assert client.put(f"{base}/article/7", json={"amount": 3}, headers=auth_headers).status_code == 200
    assert amounts() == [(7, 3)]

    assert client.put(f"{base}/article/7", json={"amount": 5}, headers=auth_headers).status_code == 200
    assert amounts() == [(7, 5)]

    assert client.delete(f"{base}/article/7", headers=auth_headers).status_code == 200
    assert amounts() == []

    second = client.delete(f"{base}/article/7", headers=auth_headers)
    assert second.status_code == 200
    assert second.json()["articles"] == []


def test_article_put_errors(client, auth_headers, articles):
    created = _create(client, auth_headers)
    base = f"/help-requests/{created['id']}"

    assert client.put(f"{base}/article/999", json={"amount": 1}, headers=auth_headers).status_code == 404
    assert client.put(f"{base}/article/7", json={"amount": 0}, headers=auth_headers).status_code == 400
    assert client.put(f"{base}/article/7", json={"amount": -1}, headers=auth_headers).status_code == 400
    assert client.put(f"{base}/article/7", json={}, headers=auth_headers).status_code == 400
    assert client.put("/help-requests/999/article/7", json={"amount": 1}, headers=auth_headers).status_code == 404


def test_delete_article_on_unknown_help_request(client, auth_headers, articles):
    response = client.delete("/help-requests/999/article/7", headers=auth_headers)
    assert response.status_code == 404


def test_get_unknown_help_request(client, auth_headers):
    response = client.get("/help-requests/999", headers=auth_headers)
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_update_keeps_requester(client, auth_headers, users, articles):
    created = _create(client, auth_headers)

    response = client.put(
        f"/help-requests/{created['id']}",
        json={"status": "ONGOING", "requesterUserId": users[1].id},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ONGOING"
    assert body["zipCode"] == "10115"
    assert body["requesterUserId"] == users[0].id


def test_update_unknown_help_request(client, auth_headers):
    response = client.put("/help-requests/999", json={"status": "ONGOING"}, headers=auth_headers)
    assert response.status_code == 404


def test_create_validation_errors(client, auth_headers, articles):
    assert client.post("/help-requests", json={}, headers=auth_headers).status_code == 400
    assert client.post("/help-requests", json={"zipCode": "  "}, headers=auth_headers).status_code == 400
    assert client.post(
        "/help-requests", json={"zipCode": "10115", "status": "LOST"}, headers=auth_headers
    ).status_code == 400
    assert client.post(
        "/help-requests",
        json={"zipCode": "10115", "articles": [{"articleId": 999, "amount": 1}]},
        headers=auth_headers,
    ).status_code == 404


def test_zip_code_single_value_equals_array(client, auth_headers, articles):
    first = _create(client, auth_headers, zipCode="12345")
    _create(client, auth_headers, zipCode="10115")

    bare = _ids(client.get("/help-requests", params={"zipCode": "12345"}, headers=auth_headers))
    bracketed = _ids(client.get("/help-requests", params={"zipCode[]": "12345"}, headers=auth_headers))
    repeated = _ids(client.get("/help-requests", params=[("zipCode[]", "12345")], headers=auth_headers))

    assert bare == bracketed == repeated == [first["id"]]


def test_multi_valued_filters_match_any(client, auth_headers, articles):
    a = _create(client, auth_headers, zipCode="12345", status="OPEN")
    b = _create(client, auth_headers, zipCode="10115", status="ONGOING")
    _create(client, auth_headers, zipCode="80331", status="OPEN")
    _create(client, auth_headers, zipCode="10115", status="COMPLETED")

    found = _ids(client.get(
        "/help-requests",
        params=[("zipCode[]", "12345"), ("zipCode[]", "10115"), ("status[]", "OPEN"), ("status[]", "ONGOING")],
        headers=auth_headers,
    ))

    assert found == [a["id"], b["id"]]


def test_me_equals_explicit_user_id(client, users, articles, auth_headers_for):
    alice, bob = users
    alice_headers = auth_headers_for(alice.id)
    bob_headers = auth_headers_for(bob.id)
    mine = _create(client, alice_headers)
    _create(client, bob_headers)

    by_me = _ids(client.get("/help-requests", params={"userId": "me"}, headers=alice_headers))
    by_id = _ids(client.get("/help-requests", params={"userId": alice.id}, headers=bob_headers))

    assert by_me == by_id == [mine["id"]]


def test_exclude_user_id(client, users, articles, auth_headers_for):
    alice, bob = users
    _create(client, auth_headers_for(alice.id))
    theirs = _create(client, auth_headers_for(bob.id))

    found = _ids(client.get(
        "/help-requests",
        params={"userId": alice.id, "excludeUserId": alice.id},
        headers=auth_headers_for(alice.id),
    ))
    assert found == []

    found = _ids(client.get(
        "/help-requests", params={"excludeUserId": alice.id}, headers=auth_headers_for(alice.id)
    ))
    assert found == [theirs["id"]]


def test_include_requester(client, auth_headers, users, articles):
    _create(client, auth_headers)

    without = client.get("/help-requests", headers=auth_headers).json()
    with_requester = client.get(
        "/help-requests", params={"includeRequester": "true"}, headers=auth_headers
    ).json()

    assert without[0]["requester"] is None
    assert with_requester[0]["requester"] == {
        "id": users[0].id,
        "firstName": "Alice",
        "lastName": "Adams",
        "zipCode": "10115",
    }


@pytest.mark.parametrize("params", [
    {"status": "LOST"},
    {"userId": "someone"},
    {"excludeUserId": "x"},
])
def test_bad_filters_are_rejected(client, auth_headers, params):
    response = client.get("/help-requests", params=params, headers=auth_headers)
    assert response.status_code == 400


def test_invalid_amount_in_duplicate_line_is_rejected(client, auth_headers, articles):
    lines = [{"articleId": 7, "amount": -1}, {"articleId": 7, "amount": 3}]

    response = client.post("/help-requests", json={"zipCode": "10115", "articles": lines}, headers=auth_headers)
    assert response.status_code == 400
    assert client.get("/help-requests", headers=auth_headers).json() == []

    created = _create(client, auth_headers, articles=[{"articleId": 1, "amount": 2}])
    response = client.put(f"/help-requests/{created['id']}", json={"articles": lines}, headers=auth_headers)
    assert response.status_code == 400

    fetched = client.get(f"/help-requests/{created['id']}", headers=auth_headers).json()
    assert [(line["articleId"], line["amount"]) for line in fetched["articles"]] == [(1, 2)]
