import io


def test_health_ok(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"ok": True}


def test_import_json_and_read_back(client):
    response = client.post("/api/v1/categories/import", json=[
        {"description": "Root", "ac_attr1": "red", "attr": {"2": "XL"}},
    ])
    assert response.status_code == 200
    report = response.get_json()
    assert report["imported"] == 1

    category_id = report["category_ids"][0]
    response = client.get(f"/api/v1/categories/{category_id}")
    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "Root"
    assert data["attributes"]["attribute1"] == "red"
    assert data["attributes"]["attribute2"] == "XL"


def test_import_csv_upload(client):
    csv_body = b"description,cmsheadline\nShoes,Best shoes\n"
    response = client.post(
        "/api/v1/categories/import",
        data={"file": (io.BytesIO(csv_body), "categories.csv")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    assert response.get_json()["imported"] == 1


def test_import_rejects_bad_payload(client):
    response = client.post("/api/v1/categories/import", data="{oops",
                           content_type="application/json")
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_unknown_category_is_404(client):
    response = client.get("/api/v1/categories/4242")
    assert response.status_code == 404
    assert response.get_json() == {"error": "not found"}


def test_assign_articles(client):
    category_id = client.post(
        "/api/v1/categories/import", json={"description": "Root"},
    ).get_json()["category_ids"][0]

    response = client.post(f"/api/v1/categories/{category_id}/articles",
                           json={"article_ids": [1, 1, 0]})
    assert response.status_code == 200
    report = response.get_json()
    assert report["imported"] == 2
    assert report["skipped"] == 1

    response = client.post(f"/api/v1/categories/{category_id}/articles",
                           json={"article_ids": "1"})
    assert response.status_code == 400
