"""Tests for catalog endpoints, with the provider mocked by respx."""
import httpx
import respx
from httpx import AsyncClient

from tests.factories import TMDB_IMAGE_BASE_URL, detail_json, movie_json, page_json


async def test_list_popular(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    route = mock_tmdb.get("/movie/popular").respond(
        json=page_json([movie_json(1, "Dune"), movie_json(2, "Heat")], page=3, total_pages=10),
    )

    response = await client.get("/movies/popular", params={"page": 3})
    assert response.status_code == 200

    data = response.json()
    assert data["page"] == 3
    assert data["total_pages"] == 10
    assert [m["title"] for m in data["items"]] == ["Dune", "Heat"]
    assert data["items"][0]["poster_url"] == f"{TMDB_IMAGE_BASE_URL}/poster.jpg"
    assert route.calls.last.request.url.params["page"] == "3"


async def test_list_popular_defaults_to_first_page(
    client: AsyncClient, mock_tmdb: respx.MockRouter,
) -> None:
    route = mock_tmdb.get("/movie/popular").respond(json=page_json([movie_json(1)]))

    response = await client.get("/movies/popular")

    assert response.status_code == 200
    assert route.calls.last.request.url.params["page"] == "1"


async def test_list_popular_invalid_page(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    route = mock_tmdb.get("/movie/popular").respond(json=page_json([]))

    for page in (0, -1):
        response = await client.get("/movies/popular", params={"page": page})
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_page"

    assert route.call_count == 0


async def test_list_popular_page_past_end(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    mock_tmdb.get("/movie/popular").respond(json=page_json([], page=2, total_pages=1))

    response = await client.get("/movies/popular", params={"page": 2})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_page"


async def test_list_popular_page_past_provider_limit(
    client: AsyncClient, mock_tmdb: respx.MockRouter,
) -> None:
    route = mock_tmdb.get("/movie/popular").respond(
        status_code=400,
        json={"success": False, "status_message": "Invalid page: Pages start at 1 and max at 500."},
    )

    response = await client.get("/movies/popular", params={"page": 501})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_page"
    assert route.call_count == 0


async def test_list_popular_provider_unauthorized(
    client: AsyncClient, mock_tmdb: respx.MockRouter,
) -> None:
    mock_tmdb.get("/movie/popular").respond(status_code=401)

    response = await client.get("/movies/popular")

    assert response.status_code == 502
    assert response.json()["error"] == "catalog_unauthorized"


async def test_list_popular_provider_down(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    mock_tmdb.get("/movie/popular").mock(side_effect=httpx.ConnectError("refused"))

    response = await client.get("/movies/popular")

    assert response.status_code == 503
    assert response.json()["error"] == "catalog_unavailable"


async def test_list_popular_provider_malformed(
    client: AsyncClient, mock_tmdb: respx.MockRouter,
) -> None:
    mock_tmdb.get("/movie/popular").respond(json={"unexpected": True})

    response = await client.get("/movies/popular")

    assert response.status_code == 502
    assert response.json()["error"] == "catalog_malformed"


async def test_search(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    route = mock_tmdb.get("/search/movie").respond(
        json=page_json([movie_json(11, "Alien")], total_pages=1),
    )

    response = await client.get("/movies/search", params={"query": "alien"})

    assert response.status_code == 200
    assert [m["id"] for m in response.json()["items"]] == [11]
    assert route.calls.last.request.url.params["query"] == "alien"


async def test_search_empty_query(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    route = mock_tmdb.get("/search/movie").respond(json=page_json([]))

    missing = await client.get("/movies/search")
    empty = await client.get("/movies/search", params={"query": ""})

    assert missing.status_code == 400
    assert empty.status_code == 400
    assert empty.json()["error"] == "invalid_query"
    assert route.call_count == 0


async def test_get_movie(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    mock_tmdb.get("/movie/603").respond(json=detail_json(603, "The Matrix"))

    response = await client.get("/movies/603")

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "The Matrix"
    assert data["runtime_minutes"] == 121
    assert data["vote_average"] == 7.4
    assert data["genres"] == [{"name": "Drama"}, {"name": "Thriller"}]


async def test_get_movie_not_found(client: AsyncClient, mock_tmdb: respx.MockRouter) -> None:
    mock_tmdb.get("/movie/1").respond(status_code=404)

    response = await client.get("/movies/1")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


async def test_get_movie_non_integer_id(client: AsyncClient) -> None:
    response = await client.get("/movies/abc")
    assert response.status_code == 422


async def test_get_movie_out_of_range_id(client: AsyncClient) -> None:
    for movie_id in ["0", "-1", "99999999999999999999"]:
        response = await client.get(f"/movies/{movie_id}")
        assert response.status_code == 422, movie_id


async def test_catalog_does_not_require_login(
    client: AsyncClient, mock_tmdb: respx.MockRouter,
) -> None:
    mock_tmdb.get("/movie/popular").respond(json=page_json([]))

    response = await client.get("/movies/popular", headers={"Authorization": "Bearer cg_forged"})

    assert response.status_code == 200
