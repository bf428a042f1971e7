"""
Article catalog API tests.
"""

import pytest


def test_list_articles(client, auth_headers, articles):
    response = client.get("/articles", headers=auth_headers)

    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [1, 7, 9]


def test_list_articles_by_language(client, auth_headers, articles):
    response = client.get("/articles", params={"language": "en"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == [{"id": 9, "name": "Toilet paper (8 rolls)", "language": "en"}]


def test_unknown_language_rejected(client, auth_headers, articles):
    response = client.get("/articles", params={"language": "fr"}, headers=auth_headers)
    assert response.status_code == 400


def test_get_article(client, auth_headers, articles):
    response = client.get("/articles/7", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Milch (1 l)"


def test_get_unknown_article(client, auth_headers, articles):
    response = client.get("/articles/999", headers=auth_headers)
    assert response.status_code == 404


def test_create_article(client, auth_headers, articles):
    response = client.post(
        "/articles",
        json={"name": "  Rice (1 kg) ", "language": "en"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Rice (1 kg)"
    assert created["language"] == "en"

    fetched = client.get(f"/articles/{created['id']}", headers=auth_headers)
    assert fetched.json() == created


@pytest.mark.parametrize("body", [
    {"name": "", "language": "de"},
    {"name": "x" * 256, "language": "de"},
    {"name": "Salt (500 g)", "language": "fr"},
    {"language": "de"},
])
def test_create_article_validation(client, auth_headers, body):
    response = client.post("/articles", json=body, headers=auth_headers)
    assert response.status_code == 400


def test_new_article_can_be_requested(client, auth_headers, articles):
    article = client.post(
        "/articles", json={"name": "Pasta (500 g)", "language": "en"}, headers=auth_headers
    ).json()
    help_request = client.post("/help-requests", json={"zipCode": "10115"}, headers=auth_headers).json()

    response = client.put(
        f"/help-requests/{help_request['id']}/article/{article['id']}",
        json={"amount": 2},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["articles"][0]["article"]["name"] == "Pasta (500 g)"
