from helpers import auth_headers, seed_players

BASE = "/api/v0"


def test_leaderboard_orders_by_rating(client, session_maker):
    seed_players(
        session_maker,
        ("p1", "Alice", 1200),
        ("p2", "Bob", 1450),
        ("p3", "Carol", 1300),
        ("p4", "dave", 1300),
    )

    resp = client.get(f"{BASE}/leaderboards")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 4
    assert data["limit"] == 50
    assert data["offset"] == 0
    assert [(e["rank"], e["id"]) for e in data["leaders"]] == [
        (1, "p2"),
        (2, "p3"),
        (3, "p4"),
        (4, "p1"),
    ]


def test_leaderboard_paginates_with_absolute_ranks(client, session_maker):
    seed_players(
        session_maker,
        ("p1", "Alice", 1200),
        ("p2", "Bob", 1450),
        ("p3", "Carol", 1300),
    )
    data = client.get(f"{BASE}/leaderboards", params={"limit": 2, "offset": 1}).json()
    assert data["total"] == 3
    assert [(e["rank"], e["id"]) for e in data["leaders"]] == [(2, "p3"), (3, "p1")]


def test_leaderboard_reflects_confirmed_results(client, session_maker):
    seed_players(session_maker, ("p1", "Alice", 1200), ("p2", "Bob", 1210))

    body = {"opponentId": "p2", "winnerId": "p1", "sets": [[6, 3], [6, 4]]}
    match = client.post(f"{BASE}/matches", json=body, headers=auth_headers("p1")).json()
    leaders = client.get(f"{BASE}/leaderboards").json()["leaders"]
    assert leaders[0]["id"] == "p2"

    client.patch(
        f"{BASE}/matches/{match['id']}",
        json={"status": "confirmed"},
        headers=auth_headers("p2"),
    )
    leaders = client.get(f"{BASE}/leaderboards").json()["leaders"]
    assert [e["id"] for e in leaders] == ["p1", "p2"]
    assert leaders[0]["wins"] == 1
    assert leaders[1]["losses"] == 1


def test_leaderboard_rejects_bad_paging(client):
    assert client.get(f"{BASE}/leaderboards", params={"limit": 0}).status_code == 422
    assert client.get(f"{BASE}/leaderboards", params={"offset": -1}).status_code == 422
