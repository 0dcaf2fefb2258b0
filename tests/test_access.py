"""Tests for the access evaluator and its context loaders."""

from __future__ import annotations

import random

import pytest

from taskboard.errors import AccessDenied, NotFound
from taskboard.services.access import (
    AccessContext,
    AccessLevel,
    authorize,
    has_access,
    load_board,
    load_card,
    load_list,
    require_member,
    require_owner,
)


USER_POOL = [f"user-{i}" for i in range(12)]


def _context(owner_id: str, member_ids) -> AccessContext:
    return AccessContext(board_id="board-1", owner_id=owner_id, member_ids=frozenset(member_ids))


class TestAuthorize:
    def test_owner(self):
        assert authorize("u1", _context("u1", [])) is AccessLevel.owner

    def test_owner_wins_over_member_row(self):
        # The owner also has a membership row with role "owner"
        assert authorize("u1", _context("u1", ["u1", "u2"])) is AccessLevel.owner

    def test_member(self):
        assert authorize("u2", _context("u1", ["u1", "u2"])) is AccessLevel.member

    def test_denied(self):
        assert authorize("u3", _context("u1", ["u1", "u2"])) is AccessLevel.denied

    @pytest.mark.parametrize("seed", range(25))
    def test_access_iff_owner_or_member(self, seed):
        """Random membership sets: access exactly when owner or listed member."""
        rng = random.Random(seed)
        owner_id = rng.choice(USER_POOL)
        member_ids = set(rng.sample(USER_POOL, rng.randint(0, len(USER_POOL))))
        context = _context(owner_id, member_ids)

        for user_id in USER_POOL:
            expected = user_id == owner_id or user_id in member_ids
            assert has_access(user_id, context) is expected
            if expected:
                assert require_member(user_id, context) is not AccessLevel.denied
            else:
                with pytest.raises(AccessDenied):
                    require_member(user_id, context)
            if user_id == owner_id:
                assert authorize(user_id, context) is AccessLevel.owner


class TestRequire:
    def test_member_passes_member_check(self):
        assert require_member("u2", _context("u1", ["u2"])) is AccessLevel.member

    def test_outsider_rejected(self):
        with pytest.raises(AccessDenied):
            require_member("u3", _context("u1", ["u2"]))

    def test_member_rejected_for_owner_only_action(self):
        with pytest.raises(AccessDenied, match="Only the board owner can delete"):
            require_owner("u2", _context("u1", ["u2"]), "delete")

    def test_owner_passes_owner_check(self):
        assert require_owner("u1", _context("u1", ["u2"])) is AccessLevel.owner


class TestLoaders:
    def test_load_board_context(self, session, owner, member, board):
        loaded, context = load_board(session, board.id)
        assert loaded.id == board.id
        assert context.owner_id == owner.id
        assert context.member_ids == frozenset({owner.id, member.id})

    def test_load_board_missing(self, session):
        with pytest.raises(NotFound, match="Board not found"):
            load_board(session, "missing")

    def test_load_list_resolves_owning_board(self, session, board, board_lists):
        loaded, context = load_list(session, board_lists[1].id)
        assert loaded.title == "Doing"
        assert context.board_id == board.id

    def test_load_list_missing(self, session):
        with pytest.raises(NotFound, match="List not found"):
            load_list(session, "missing")

    def test_load_card_resolves_owning_board(self, session, board, board_lists, make_card):
        card = make_card(board_lists[0].id)
        loaded, context = load_card(session, card.id)
        assert loaded.id == card.id
        assert context.board_id == board.id

    def test_load_card_missing(self, session):
        with pytest.raises(NotFound, match="Card not found"):
            load_card(session, "missing")
