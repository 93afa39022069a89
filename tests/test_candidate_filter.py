"""
Candidate Filter Tests

Tests validate:
- Each SearchFilters predicate on its own
- AND across predicates, OR within skill and availability lists
- Inclusive minimum rating
- Candidates without availability fail availability filters
- Identity on empty filters and empty input
"""

import pytest

from skillswap.matching.models import AvailabilityFlags, SearchFilters
from skillswap.matching.match import candidate_matches, filter_candidates

from conftest import make_profile


def ids(profiles):
    return [p.id for p in profiles]


class TestSearchTerm:
    """search_term matches name, bio or any skill, case-insensitively."""

    def test_matches_bio(self, candidates):
        result = filter_candidates(candidates, SearchFilters(search_term="JAZZ"))
        assert ids(result) == ["u-alice"]

    def test_matches_offered_skill(self, candidates):
        result = filter_candidates(candidates, SearchFilters(search_term="spanish"))
        assert ids(result) == ["u-bob"]

    def test_matches_wanted_skill(self, candidates):
        result = filter_candidates(candidates, SearchFilters(search_term="web dev"))
        assert ids(result) == ["u-carol"]

    def test_matches_name(self, candidates):
        result = filter_candidates(candidates, SearchFilters(search_term="carol"))
        assert ids(result) == ["u-carol"]

    def test_no_match(self, candidates):
        assert filter_candidates(candidates, SearchFilters(search_term="xylophone")) == []


class TestLocationFilter:

    def test_substring(self, candidates):
        result = filter_candidates(candidates, SearchFilters(location="new york"))
        assert ids(result) == ["u-alice"]

    def test_candidate_without_location_excluded(self, carol):
        assert not candidate_matches(carol, SearchFilters(location="boston"))


class TestSkillFilters:
    """Any filter skill may be a substring of any candidate skill."""

    def test_offered_partial_skill(self, candidates):
        result = filter_candidates(candidates, SearchFilters(skills_offered=["guit"]))
        assert ids(result) == ["u-alice"]

    def test_offered_any_of_list(self, candidates):
        result = filter_candidates(
            candidates,
            SearchFilters(skills_offered=["Piano", "french", "yoga"]),
        )
        assert ids(result) == ["u-bob", "u-carol"]

    def test_wanted(self, candidates):
        result = filter_candidates(candidates, SearchFilters(skills_wanted=["WEB"]))
        assert ids(result) == ["u-carol"]

    def test_offered_and_wanted_are_separate(self, candidates):
        """Bob offers French; Alice only wants it."""
        result = filter_candidates(candidates, SearchFilters(skills_offered=["French"]))
        assert ids(result) == ["u-bob"]


class TestRatingFilter:

    def test_min_rating_inclusive(self, candidates):
        result = filter_candidates(candidates, SearchFilters(min_rating=4))
        assert ids(result) == ["u-alice", "u-bob"]

    def test_min_rating_zero_keeps_unrated(self):
        unrated = make_profile("new", rating=0.0)
        assert filter_candidates([unrated], SearchFilters(min_rating=0)) == [unrated]

    def test_min_rating_above_everyone(self, candidates):
        assert filter_candidates(candidates, SearchFilters(min_rating=4.6)) == []


class TestAvailabilityFilters:

    def test_days(self, candidates):
        result = filter_candidates(candidates, SearchFilters(availability_days=["weekends"]))
        assert ids(result) == ["u-bob"]

    def test_any_day(self, candidates):
        result = filter_candidates(
            candidates,
            SearchFilters(availability_days=["weekdays", "weekends"]),
        )
        assert ids(result) == ["u-alice", "u-bob"]

    def test_times(self, candidates):
        evenings = filter_candidates(candidates, SearchFilters(availability_times=["evenings"]))
        flexible = filter_candidates(candidates, SearchFilters(availability_times=["flexible"]))

        assert ids(evenings) == ["u-alice"]
        assert ids(flexible) == ["u-bob"]

    def test_unknown_token_never_matches(self, candidates):
        result = filter_candidates(candidates, SearchFilters(availability_times=["midnight"]))
        assert result == []

    def test_day_tokens_are_not_times(self, candidates):
        """'weekends' is a day; it does not satisfy a time filter."""
        result = filter_candidates(candidates, SearchFilters(availability_times=["weekends"]))
        assert result == []

    def test_missing_availability_excluded(self, carol):
        assert not candidate_matches(carol, SearchFilters(availability_days=["weekdays"]))
        assert not candidate_matches(carol, SearchFilters(availability_times=["mornings"]))

    def test_missing_availability_passes_without_filter(self, carol):
        assert candidate_matches(carol, SearchFilters())

    def test_all_false_record_excluded(self):
        idle = make_profile("idle", availability=AvailabilityFlags())
        assert filter_candidates([idle], SearchFilters(availability_days=["weekdays"])) == []


class TestCombinedFilters:

    def test_predicates_are_anded(self, candidates):
        filters = SearchFilters(min_rating=4, skills_offered=["french"], location="boston")
        assert ids(filter_candidates(candidates, filters)) == ["u-bob"]

    def test_and_can_exclude_everyone(self, candidates):
        filters = SearchFilters(search_term="jazz", availability_days=["weekends"])
        assert filter_candidates(candidates, filters) == []


class TestFilterIdentity:

    def test_empty_filters_return_input(self, candidates):
        assert filter_candidates(candidates, SearchFilters()) == candidates

    def test_none_filters_return_input(self, candidates):
        assert filter_candidates(candidates, None) == candidates

    def test_empty_strings_and_lists_pass(self, candidates):
        filters = SearchFilters(
            search_term="",
            location="",
            skills_offered=[],
            skills_wanted=None,
            availability_days=[],
            availability_times=None,
        )
        assert filter_candidates(candidates, filters) == candidates

    @pytest.mark.parametrize("filters", [
        SearchFilters(),
        SearchFilters(search_term="guitar"),
        SearchFilters(min_rating=5, availability_days=["weekends"]),
    ])
    def test_empty_input(self, filters):
        assert filter_candidates([], filters) == []

    def test_input_not_modified(self, candidates):
        snapshot = list(candidates)

        filter_candidates(candidates, SearchFilters(min_rating=4.2))

        assert candidates == snapshot
