"""Unit tests for the Freet model's vote transitions."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from fritter.domain.error import InvariantViolationError
from fritter.domain.model.freet import Freet, next_modified
from fritter.domain.value import FreetId, UserId, VoteType
from tests.conftest import BASE_TIME, at, make_freet

AUTHOR = UserId(uuid4())
VOTER = UserId(uuid4())


def _upvoted() -> Freet:
    return make_freet(AUTHOR).with_vote(VOTER, VoteType.UPVOTE, at(1))


def _downvoted() -> Freet:
    return make_freet(AUTHOR).with_vote(VOTER, VoteType.DOWNVOTE, at(1))


class TestWithVote:
    """Tests for Freet.with_vote()."""

    @pytest.mark.parametrize(
        "start, vote, expected",
        [
            (_upvoted, VoteType.NO_VOTE, VoteType.NO_VOTE),
            (_downvoted, VoteType.NO_VOTE, VoteType.NO_VOTE),
            (lambda: make_freet(AUTHOR), VoteType.NO_VOTE, VoteType.NO_VOTE),
            (lambda: make_freet(AUTHOR), VoteType.UPVOTE, VoteType.UPVOTE),
            (_downvoted, VoteType.UPVOTE, VoteType.UPVOTE),
            (_upvoted, VoteType.UPVOTE, VoteType.UPVOTE),
            (lambda: make_freet(AUTHOR), VoteType.DOWNVOTE, VoteType.DOWNVOTE),
            (_upvoted, VoteType.DOWNVOTE, VoteType.DOWNVOTE),
            (_downvoted, VoteType.DOWNVOTE, VoteType.DOWNVOTE),
        ],
    )
    def test_transition_table(self, start, vote, expected):
        """Every (membership, request) pair should land in the expected set."""
        freet = start().with_vote(VOTER, vote, at(10))

        assert freet.vote_of(VOTER) == expected
        assert not (freet.upvoters & freet.downvoters)
        if expected == VoteType.UPVOTE:
            assert VOTER in freet.upvoters and VOTER not in freet.downvoters
        elif expected == VoteType.DOWNVOTE:
            assert VOTER in freet.downvoters and VOTER not in freet.upvoters
        else:
            assert VOTER not in freet.upvoters and VOTER not in freet.downvoters

    @pytest.mark.parametrize("vote", list(VoteType))
    def test_repeating_a_vote_is_idempotent(self, vote):
        """Applying the same vote twice gives the same sets as applying it once."""
        once = make_freet(AUTHOR).with_vote(VOTER, vote, at(1))
        twice = once.with_vote(VOTER, vote, at(2))

        assert twice.upvoters == once.upvoters
        assert twice.downvoters == once.downvoters

    def test_other_voters_are_untouched(self):
        """Changing one voter's vote should leave other voters alone."""
        other = UserId(uuid4())
        freet = (
            make_freet(AUTHOR)
            .with_vote(other, VoteType.DOWNVOTE, at(1))
            .with_vote(VOTER, VoteType.UPVOTE, at(2))
            .with_vote(VOTER, VoteType.DOWNVOTE, at(3))
        )

        assert freet.downvoters == {other, VOTER}
        assert freet.upvoters == frozenset()
        assert freet.score == -2

    def test_no_op_withdrawal_still_touches_date_modified(self):
        """NO_VOTE by a non-voter changes nothing but date_modified."""
        freet = make_freet(AUTHOR)

        updated = freet.with_vote(VOTER, VoteType.NO_VOTE, at(5))

        assert updated.upvoters == freet.upvoters
        assert updated.downvoters == freet.downvoters
        assert updated.date_modified == at(5)

    def test_input_freet_is_not_mutated(self):
        """Domain models are immutable; with_vote returns a new freet."""
        freet = make_freet(AUTHOR)

        freet.with_vote(VOTER, VoteType.UPVOTE, at(1))

        assert freet.upvoters == frozenset()
        assert freet.date_modified == BASE_TIME


class TestTimestamps:
    """Tests for date_modified handling."""

    def test_modified_before_created_is_rejected(self):
        """date_modified earlier than date_created should fail validation."""
        with pytest.raises(ValidationError):
            Freet(
                id=FreetId(uuid4()),
                author_id=AUTHOR,
                content="Backdated",
                date_created=at(10),
                date_modified=at(5),
            )

    def test_next_modified_advances_when_clock_has_not(self):
        """A touch at the same instant still moves date_modified forward."""
        assert next_modified(BASE_TIME, BASE_TIME) == BASE_TIME + timedelta(
            microseconds=1
        )
        assert next_modified(BASE_TIME, BASE_TIME - timedelta(seconds=3)) > BASE_TIME

    def test_next_modified_uses_clock_when_later(self):
        assert next_modified(BASE_TIME, at(7)) == at(7)

    def test_with_content_touches_date_modified(self):
        freet = make_freet(AUTHOR, content="before")

        updated = freet.with_content("after", BASE_TIME)

        assert updated.content == "after"
        assert updated.date_modified > freet.date_modified
        assert updated.date_created == freet.date_created


class TestCheckVoteInvariant:
    """Tests for Freet.check_vote_invariant()."""

    def test_overlapping_sets_raise(self):
        """A voter present in both sets should raise InvariantViolationError."""
        freet = make_freet(AUTHOR).model_copy(
            update={"upvoters": frozenset({VOTER}), "downvoters": frozenset({VOTER})}
        )

        with pytest.raises(InvariantViolationError) as exc_info:
            freet.check_vote_invariant()

        assert exc_info.value.voter_ids == [str(VOTER)]
        assert exc_info.value.freet_id == str(freet.id)

    def test_disjoint_sets_pass(self):
        _upvoted().check_vote_invariant()
