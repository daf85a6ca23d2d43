"""Unauthenticated utility routes and CORS."""

from fastapi.testclient import TestClient


class TestSearch:
    def test_echoes_term_as_json(self, client: TestClient) -> None:
        term = "<img src=x onerror=alert(1)>"
        response = client.get("/search", params={"q": term})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"message": "Results found", "searchTerm": term}

    def test_empty_term(self, client: TestClient) -> None:
        assert client.get("/search").json()["searchTerm"] == ""


class TestCrawlerFiles:
    def test_robots(self, client: TestClient) -> None:
        response = client.get("/robots.txt")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "User-agent: *\nDisallow:\n"

    def test_sitemap(self, client: TestClient) -> None:
        response = client.get("/sitemap.xml")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert "<loc>http://testserver/</loc>" in response.text


class TestHealth:
    def test_healthy(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestCors:
    def test_allowed_origin_preflight(self, client: TestClient) -> None:
        response = client.options(
            "/orders/1",
            headers={
                "Origin": "http://localhost:3001",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "X-User-Id",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3001"
        assert response.headers["access-control-allow-credentials"] == "true"
        assert "X-Content-Type-Options" in response.headers

    def test_unknown_origin_not_echoed(self, client: TestClient) -> None:
        response = client.get("/health", headers={"Origin": "https://evil.example"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers
