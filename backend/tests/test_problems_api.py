"""Tests for the problem routes."""

from httpx import AsyncClient


def problem_body(**overrides) -> dict:
    return {
        "topicId": "arrays",
        "title": "Two Sum",
        "difficulty": "Easy",
        "solution": "hashmap",
        **overrides,
    }


async def create_problem(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/problems", json=problem_body(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_problem_round_trips_all_fields(client: AsyncClient):
    body = problem_body(
        leetcodeUrl="https://leetcode.com/problems/two-sum/",
        geeksforgeeksUrl="https://www.geeksforgeeks.org/two-sum/",
        notes="check complement first",
        tags=["hashmap", "array"],
        timeComplexity="O(n)",
        spaceComplexity="O(n)",
    )

    response = await client.post("/api/problems", json=body)

    assert response.status_code == 201
    created = response.json()
    for key, value in body.items():
        assert created[key] == value
    assert created["id"]
    assert created["createdAt"]


async def test_create_problem_cleans_tags(client: AsyncClient):
    created = await create_problem(client, tags=[" a", "", "  ", "b ", "b"])

    assert created["tags"] == ["a", "b", "b"]


async def test_create_problem_rejects_unknown_difficulty(client: AsyncClient):
    response = await client.post("/api/problems", json=problem_body(difficulty="Trivial"))

    assert response.status_code == 422


async def test_create_problem_requires_solution(client: AsyncClient):
    body = problem_body()
    del body["solution"]

    response = await client.post("/api/problems", json=body)

    assert response.status_code == 422


async def test_list_problems_newest_first(client: AsyncClient):
    await create_problem(client, title="old", createdAt="2024-01-01T00:00:00Z")
    await create_problem(client, title="new", createdAt="2024-03-01T00:00:00Z")
    await create_problem(client, title="mid", createdAt="2024-02-01T00:00:00Z")

    response = await client.get("/api/problems")

    assert [p["title"] for p in response.json()] == ["new", "mid", "old"]


async def test_list_problems_by_topic(client: AsyncClient):
    await create_problem(client, title="Two Sum", topicId="arrays")
    await create_problem(client, title="Islands", topicId="graphs")

    by_path = (await client.get("/api/problems/topic/graphs")).json()
    by_query = (await client.get("/api/problems", params={"topicId": "graphs"})).json()

    assert [p["title"] for p in by_path] == ["Islands"]
    assert by_query == by_path


async def test_update_problem_keeps_created_at(client: AsyncClient):
    created = await create_problem(client)

    response = await client.put(
        f"/api/problems/{created['id']}",
        json={"notes": "revisit", "difficulty": "Medium"},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["notes"] == "revisit"
    assert updated["difficulty"] == "Medium"
    assert updated["title"] == "Two Sum"
    assert updated["createdAt"] == created["createdAt"]


async def test_get_problem(client: AsyncClient):
    created = await create_problem(client)

    response = await client.get(f"/api/problems/{created['id']}")

    assert response.status_code == 200
    assert response.json()["title"] == "Two Sum"


async def test_delete_problem(client: AsyncClient):
    created = await create_problem(client)

    response = await client.delete(f"/api/problems/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Problem deleted successfully"}
    assert (await client.get("/api/problems")).json() == []
    assert (await client.delete(f"/api/problems/{created['id']}")).status_code == 404


async def test_update_problem_rejects_null_required_fields(client: AsyncClient):
    created = await create_problem(client)

    for body in ({"title": None}, {"tags": None}, {"solution": None}):
        response = await client.put(f"/api/problems/{created['id']}", json=body)
        assert response.status_code == 422

    stored = (await client.get(f"/api/problems/{created['id']}")).json()
    assert stored["title"] == "Two Sum"


async def test_update_problem_can_clear_optional_fields(client: AsyncClient):
    created = await create_problem(client, notes="old")

    response = await client.put(f"/api/problems/{created['id']}", json={"notes": None})

    assert response.status_code == 200
    assert response.json()["notes"] is None
