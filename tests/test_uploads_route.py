import pytest

from controllers.uploads_controller import content_type_for


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("a.png", "image/png"),
        ("a.PNG", "image/png"),
        ("a.gif", "image/gif"),
        ("a.webp", "image/webp"),
        ("a.jpg", "image/jpeg"),
        ("a.bmp", "image/jpeg"),
        ("noextension", "image/jpeg"),
    ],
)
def test_content_type_for(filename, expected):
    assert content_type_for(filename) == expected


def test_serves_saved_file_with_cache_header(client, upload_dir):
    upload_dir.ensure()
    (upload_dir.root / "upload_1_gemini-native-image.png").write_bytes(b"png-bytes")

    response = client.get("/uploads/upload_1_gemini-native-image.png")

    assert response.status_code == 200
    assert response.content == b"png-bytes"
    assert response.headers["content-type"] == "image/png"
    assert response.headers["cache-control"] == "public, max-age=31536000"


def test_serves_nested_path(client, upload_dir):
    nested = upload_dir.root / "2024" / "march"
    nested.mkdir(parents=True)
    (nested / "shot.webp").write_bytes(b"webp")

    response = client.get("/uploads/2024/march/shot.webp")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/webp"


def test_missing_file_is_404(client):
    response = client.get("/uploads/nope.jpg")

    assert response.status_code == 404
    assert response.json() == {"error": "File not found"}


def test_path_outside_upload_dir_is_404(client, tmp_path):
    (tmp_path / "secret.jpg").write_bytes(b"secret")

    response = client.get("/uploads/..%2Fsecret.jpg")

    assert response.status_code == 404


def test_path_with_nul_byte_is_404(client):
    response = client.get("/uploads/a%00b.png")

    assert response.status_code == 404
    assert response.json() == {"error": "File not found"}


def test_generated_image_round_trips_through_static_route(client):
    body = client.post(
        "/generate",
        data={"prompt": "make it cinematic"},
        files={"image": ("cat.jpg", b"jpeg", "image/jpeg")},
    ).json()

    uploaded = client.get(body["uploadedImageUrl"])
    assert uploaded.status_code == 200
    assert uploaded.content == b"jpeg"
    assert uploaded.headers["content-type"] == "image/jpeg"

    generated = client.get(f"/uploads/{body['geminiImagePath']}")
    assert generated.status_code == 200
    assert generated.headers["content-type"] == "image/png"
