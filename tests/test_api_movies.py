"""Tests for movies API endpoints."""

from cinevault.core.identity import new_movie_id
from cinevault.db.schema import Base

POSTER = ("inception.png", b"\x89PNG\r\n\x1a\n fake poster", "image/png")

INCEPTION = {
    "title": "Inception",
    "description": "A thief who steals corporate secrets through dreams.",
    "genre": "Sci-Fi",
    "rating": "9",
    "releaseDate": "2010-07-16",
}


def create_movie(client, data=None, poster=POSTER):
    """POST a movie and return the response."""
    files = {"image": poster} if poster else None
    return client.post("/api/movies", data=data or INCEPTION, files=files)


class TestCreateMovie:
    """Test POST /api/movies."""

    def test_returns_201_with_movie(self, client):
        response = create_movie(client)

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {
            "id",
            "title",
            "description",
            "imageUrl",
            "genre",
            "rating",
            "releaseDate",
        }
        assert data["title"] == "Inception"
        assert data["rating"] == 9
        assert data["releaseDate"] == "2010-07-16"

    def test_image_url_from_upload(self, client, gateway):
        data = create_movie(client).json()

        assert data["imageUrl"].startswith("https://")
        public_id = next(iter(gateway.images))
        assert data["imageUrl"].endswith(public_id)
        assert gateway.images[public_id] == POSTER[1]

    def test_created_movie_is_retrievable(self, client):
        created = create_movie(client).json()

        response = client.get(f"/api/movies/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_without_file_returns_400(self, client, gateway):
        response = create_movie(client, poster=None)

        assert response.status_code == 400
        assert response.json() == {"message": "No file uploaded"}
        assert gateway.upload_count == 0
        assert client.get("/api/movies").json() == []

    def test_text_image_field_returns_400(self, client, gateway):
        """A plain form value named image is not a file."""
        response = client.post("/api/movies", data={**INCEPTION, "image": "notafile"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "No file uploaded"
        assert "image" in body["error"]
        assert gateway.upload_count == 0
        assert client.get("/api/movies").json() == []

    def test_out_of_range_rating_returns_400(self, client, gateway):
        response = create_movie(client, data={**INCEPTION, "rating": "11"})

        assert response.status_code == 400
        assert "rating" in response.json()["error"]
        assert gateway.upload_count == 0
        assert client.get("/api/movies").json() == []

    def test_negative_rating_returns_400(self, client):
        response = create_movie(client, data={**INCEPTION, "rating": "-1"})
        assert response.status_code == 400

    def test_missing_field_returns_400(self, client):
        data = {k: v for k, v in INCEPTION.items() if k != "genre"}
        response = create_movie(client, data=data)

        assert response.status_code == 400
        assert "genre" in response.json()["error"]

    def test_client_image_url_is_ignored(self, client):
        data = {**INCEPTION, "imageUrl": "https://evil.example/x.png"}
        created = create_movie(client, data=data).json()
        assert created["imageUrl"] != "https://evil.example/x.png"

    def test_upload_failure_returns_500(self, client, gateway):
        gateway.fail_uploads = True

        response = create_movie(client)

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Error uploading image"
        assert body["error"]
        assert client.get("/api/movies").json() == []

    def test_database_failure_returns_500_and_discards_upload(self, client, gateway, engine):
        Base.metadata.drop_all(engine)

        response = create_movie(client)

        assert response.status_code == 500
        assert response.json()["message"] == "Error uploading image"
        assert gateway.images == {}


class TestListMovies:
    """Test GET /api/movies."""

    def test_empty_list(self, client):
        response = client.get("/api/movies")
        assert response.status_code == 200
        assert response.json() == []

    def test_returns_all_in_insertion_order(self, client):
        ids = [
            create_movie(client, data={**INCEPTION, "title": title}).json()["id"]
            for title in ["Alien", "Brazil", "Cube"]
        ]

        response = client.get("/api/movies")

        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == ids

    def test_database_failure_returns_500(self, client, engine):
        Base.metadata.drop_all(engine)

        response = client.get("/api/movies")

        assert response.status_code == 500
        assert response.json()["message"] == "Error fetching movies"


class TestGetMovie:
    """Test GET /api/movies/{movie_id}."""

    def test_returns_404_for_nonexistent_movie(self, client):
        response = client.get(f"/api/movies/{new_movie_id()}")
        assert response.status_code == 404
        assert response.json() == {"message": "Movie not found"}

    def test_malformed_id_returns_404(self, client):
        response = client.get("/api/movies/not-a-real-id")
        assert response.status_code == 404

    def test_database_failure_returns_500(self, client, engine):
        Base.metadata.drop_all(engine)

        response = client.get(f"/api/movies/{new_movie_id()}")

        assert response.status_code == 500
        assert response.json()["message"] == "Error fetching movie"


class TestUpdateMovie:
    """Test PUT /api/movies/{movie_id}."""

    def test_without_file_preserves_image_url(self, client, gateway):
        created = create_movie(client).json()

        response = client.put(f"/api/movies/{created['id']}", data={"title": "Inception (2010)"})

        assert response.status_code == 200
        data = response.json()
        assert data["imageUrl"] == created["imageUrl"]
        assert data["title"] == "Inception (2010)"
        assert gateway.upload_count == 1

    def test_with_file_replaces_only_image_url(self, client, gateway):
        created = create_movie(client).json()
        new_poster = ("inception-2.png", b"another poster", "image/png")

        response = client.put(f"/api/movies/{created['id']}", files={"image": new_poster})

        assert response.status_code == 200
        data = response.json()
        assert data["imageUrl"] != created["imageUrl"]
        assert data["imageUrl"].startswith("https://")
        assert {k: v for k, v in data.items() if k != "imageUrl"} == {
            k: v for k, v in created.items() if k != "imageUrl"
        }

    def test_with_file_and_fields(self, client):
        created = create_movie(client).json()

        response = client.put(
            f"/api/movies/{created['id']}",
            data={"genre": "Thriller", "releaseDate": "2010-07-08"},
            files={"image": POSTER},
        )

        data = response.json()
        assert data["genre"] == "Thriller"
        assert data["releaseDate"] == "2010-07-08"
        assert data["title"] == created["title"]
        assert data["imageUrl"] != created["imageUrl"]

    def test_blank_fields_keep_previous(self, client):
        created = create_movie(client).json()

        response = client.put(
            f"/api/movies/{created['id']}",
            data={"title": "", "description": "", "rating": ""},
        )

        assert response.status_code == 200
        assert response.json() == created

    def test_zero_rating_is_applied(self, client):
        created = create_movie(client).json()

        response = client.put(f"/api/movies/{created['id']}", data={"rating": "0"})

        assert response.status_code == 200
        assert response.json()["rating"] == 0

    def test_update_is_persisted(self, client):
        created = create_movie(client).json()
        client.put(f"/api/movies/{created['id']}", data={"description": "Dream heist."})

        fetched = client.get(f"/api/movies/{created['id']}").json()

        assert fetched["description"] == "Dream heist."

    def test_returns_404_for_nonexistent_movie(self, client, gateway):
        response = client.put(
            f"/api/movies/{new_movie_id()}",
            data={"title": "Ghost"},
            files={"image": POSTER},
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Movie not found"}
        assert gateway.upload_count == 0

    def test_malformed_id_returns_404(self, client):
        response = client.put("/api/movies/xyz", data={"title": "Ghost"})
        assert response.status_code == 404

    def test_invalid_rating_returns_400(self, client):
        created = create_movie(client).json()

        response = client.put(f"/api/movies/{created['id']}", data={"rating": "10.5"})

        assert response.status_code == 400
        assert response.json()["message"] == "Error updating movie"
        assert client.get(f"/api/movies/{created['id']}").json() == created

    def test_text_image_field_returns_400(self, client, gateway):
        created = create_movie(client).json()

        response = client.put(
            f"/api/movies/{created['id']}", data={"title": "Other", "image": "notafile"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Error updating movie"
        assert "image" in body["error"]
        assert gateway.upload_count == 1
        assert client.get(f"/api/movies/{created['id']}").json() == created

    def test_upload_failure_returns_400(self, client, gateway):
        created = create_movie(client).json()
        gateway.fail_uploads = True

        response = client.put(f"/api/movies/{created['id']}", files={"image": POSTER})

        assert response.status_code == 400
        assert response.json()["message"] == "Error updating movie"
        assert client.get(f"/api/movies/{created['id']}").json() == created


class TestDeleteMovie:
    """Test DELETE /api/movies/{movie_id}."""

    def test_deletes_existing_movie(self, client):
        created = create_movie(client).json()

        response = client.delete(f"/api/movies/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Movie deleted successfully"}

    def test_deleted_movie_is_gone(self, client):
        created = create_movie(client).json()
        client.delete(f"/api/movies/{created['id']}")

        assert client.get(f"/api/movies/{created['id']}").status_code == 404
        assert client.get("/api/movies").json() == []

    def test_returns_404_for_nonexistent_movie(self, client):
        response = client.delete(f"/api/movies/{new_movie_id()}")
        assert response.status_code == 404
        assert response.json() == {"message": "Movie not found"}

    def test_second_delete_returns_404(self, client):
        created = create_movie(client).json()
        client.delete(f"/api/movies/{created['id']}")

        assert client.delete(f"/api/movies/{created['id']}").status_code == 404


class TestHealth:
    """Test health endpoint."""

    def test_health_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
