"""List endpoints: create, rename, delete and bulk reorder."""

from __future__ import annotations

from sqlmodel import select, func

from taskboard.models import BoardList, Card


def test_create_list_appends(client, member, board, board_lists, auth_headers):
    resp = client.post(f"/api/boards/{board.id}/lists", json={"title": " Review "},
                       headers=auth_headers(member))
    assert resp.status_code == 201
    body = resp.json()
    assert body["title"] == "Review"
    assert body["order"] == 3
    assert body["cards"] == []


def test_create_list_blank_title(client, owner, board, auth_headers):
    resp = client.post(f"/api/boards/{board.id}/lists", json={"title": ""},
                       headers=auth_headers(owner))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "List title is required"


def test_create_list_missing_board(client, owner, auth_headers):
    resp = client.post("/api/boards/missing/lists", json={"title": "Todo"},
                       headers=auth_headers(owner))
    assert resp.status_code == 404


def test_create_list_outsider(client, outsider, board, auth_headers):
    resp = client.post(f"/api/boards/{board.id}/lists", json={"title": "Todo"},
                       headers=auth_headers(outsider))
    assert resp.status_code == 403


def test_rename_list(client, member, board_lists, auth_headers):
    resp = client.put(f"/api/lists/{board_lists[0].id}", json={"title": "Backlog"},
                      headers=auth_headers(member))
    assert resp.status_code == 200
    assert resp.json()["title"] == "Backlog"
    assert resp.json()["order"] == 0


def test_rename_list_outsider(client, outsider, board_lists, auth_headers):
    resp = client.put(f"/api/lists/{board_lists[0].id}", json={"title": "Mine"},
                      headers=auth_headers(outsider))
    assert resp.status_code == 403


def test_delete_list_cascades_cards(client, session, member, board_lists, make_card, auth_headers):
    doomed = board_lists[0]
    make_card(doomed.id, "a")
    make_card(doomed.id, "b")
    survivor = make_card(board_lists[1].id, "c")

    resp = client.delete(f"/api/lists/{doomed.id}", headers=auth_headers(member))
    assert resp.status_code == 200
    assert resp.json() == {"id": doomed.id, "title": "Todo"}

    session.expire_all()
    assert session.exec(select(BoardList).where(BoardList.id == doomed.id)).first() is None
    remaining = session.exec(select(Card.id)).all()
    assert remaining == [survivor.id]


def test_delete_missing_list(client, owner, auth_headers):
    assert client.delete("/api/lists/missing", headers=auth_headers(owner)).status_code == 404


def test_reorder_lists(client, session, member, board, board_lists, auth_headers):
    todo, doing, done = board_lists
    resp = client.put("/api/lists/reorder", headers=auth_headers(member), json={"lists": [
        {"id": done.id, "order": 10}, {"id": todo.id, "order": 20}, {"id": doing.id, "order": 30},
    ]})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Lists reordered successfully", "updated": 3}

    session.expire_all()
    assert session.get(BoardList, done.id).order == 10
    assert session.get(BoardList, doing.id).order == 30


def test_reorder_lists_empty_payload(client, owner, auth_headers):
    resp = client.put("/api/lists/reorder", json={"lists": []}, headers=auth_headers(owner))
    assert resp.status_code == 400


def test_reorder_lists_non_numeric_order(client, session, owner, board_lists, auth_headers):
    resp = client.put("/api/lists/reorder", headers=auth_headers(owner), json={"lists": [
        {"id": board_lists[0].id, "order": 4}, {"id": board_lists[1].id, "order": "5"},
    ]})
    assert resp.status_code == 400
    session.expire_all()
    assert session.get(BoardList, board_lists[0].id).order == 0


def test_reorder_lists_missing_id(client, owner, board_lists, auth_headers):
    resp = client.put("/api/lists/reorder", headers=auth_headers(owner),
                      json={"lists": [{"order": 1}]})
    assert resp.status_code == 400


def test_reorder_lists_outsider(client, session, outsider, board_lists, auth_headers):
    resp = client.put("/api/lists/reorder", headers=auth_headers(outsider),
                      json={"lists": [{"id": board_lists[0].id, "order": 9}]})
    assert resp.status_code == 403
    session.expire_all()
    assert session.exec(select(func.max(BoardList.order))).one() == 2


def test_reorder_lists_order_beyond_64_bits(client, session, owner, board_lists, auth_headers):
    resp = client.put("/api/lists/reorder", headers=auth_headers(owner), json={"lists": [
        {"id": board_lists[0].id, "order": 4}, {"id": board_lists[1].id, "order": 2**70},
    ]})
    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation"
    session.expire_all()
    assert session.get(BoardList, board_lists[0].id).order == 0
