"""
Tests for filter construction from query parameters and the filter query.
"""

import pytest

from app.repositories.property import PropertyRepository
from app.utils.property_filters import (
    PropertyFilter,
    build_property_filter,
    parse_bhk_values,
    parse_type_tags
)


class TestFilterParsing:
    """Query-string parsing rules."""

    def test_bhk_values_strip_non_digits(self):
        assert parse_bhk_values("2 BHK,3BHK,4") == [2, 3, 4]

    def test_bhk_tokens_without_digits_are_dropped(self):
        assert parse_bhk_values("studio,2") == [2]
        assert parse_bhk_values("any") == []

    def test_type_tags_strip_plus_prefix(self):
        assert parse_type_tags("+ Flat,Villa") == ["Flat", "Villa"]

    def test_empty_parameters_produce_no_facets(self):
        result = build_property_filter()

        assert result.bhk is None
        assert result.property_types is None
        assert result.preference is None
        assert result.gender_preference is None
        assert result.house_types is None
        assert result.city is None
        assert (result.page, result.limit, result.skip) == (1, 10, 0)

    def test_commercial_types_join_residential(self):
        result = build_property_filter(residential="Flat", commercial="+ Shop,Office")
        assert result.property_types == ["Flat", "Shop", "Office"]

    def test_any_preference_disables_facet(self):
        result = build_property_filter(preference_housing="Any", gender_preference="Female")
        assert result.preference is None
        assert result.gender_preference == "Female"

    def test_family_preference_ignores_gender(self):
        result = build_property_filter(preference_housing="Family", gender_preference="Male")
        assert result.preference == "Family"
        assert result.gender_preference is None

    def test_pagination_skip(self):
        result = build_property_filter(page=3, limit=5)
        assert result.skip == 10

    def test_repr_lists_active_facets(self):
        text = repr(PropertyFilter(city="Pune", page=2, limit=5))
        assert "'city': 'Pune'" in text
        assert "page=2" in text


class TestFilterQuery:
    """Filter conditions against stored listings."""

    @pytest.fixture
    async def listings(self, property_repository: PropertyRepository, property_factory, test_owner):
        specs = [
            {"bhk": 1, "city": "Pune", "preference": "Bachelors", "gender_preference": "Male", "type": "Apartment"},
            {"bhk": 2, "city": "Pune", "preference": "Family", "gender_preference": "Female", "type": "Villa"},
            {"bhk": 3, "city": "Pune", "preference": "Family", "gender_preference": "Male", "type": "Apartment"},
            {"bhk": 2, "city": "Mumbai", "preference": "Bachelors", "gender_preference": "Female", "type": "Apartment",
             "property_type": "Shop"},
            {"bhk": 4, "city": "Mumbai", "preference": "Bachelors", "gender_preference": "Male", "type": "Villa"},
        ]
        return [
            await property_factory.create_property(property_repository, test_owner.id, **spec)
            for spec in specs
        ]

    async def test_bhk_list_matches_any_value(self, property_repository, listings):
        results = await property_repository.filter_properties(build_property_filter(bhk="2,3"))
        assert sorted(p.bhk for p in results) == [2, 2, 3]

    async def test_unparseable_bhk_matches_nothing(self, property_repository, listings):
        results = await property_repository.filter_properties(build_property_filter(bhk="studio"))
        assert results == []

    async def test_any_preference_applies_no_constraint(self, property_repository, listings):
        results = await property_repository.filter_properties(
            build_property_filter(preference_housing="Any")
        )
        assert len(results) == len(listings)

    async def test_family_with_gender_ignores_gender(self, property_repository, listings):
        results = await property_repository.filter_properties(
            build_property_filter(preference_housing="Family", gender_preference="Male")
        )
        assert sorted(p.bhk for p in results) == [2, 3]

    async def test_facets_combine_with_and(self, property_repository, listings):
        results = await property_repository.filter_properties(
            build_property_filter(city="Mumbai", house_type="Villa")
        )
        assert [p.bhk for p in results] == [4]

    async def test_property_type_membership(self, property_repository, listings):
        results = await property_repository.filter_properties(
            build_property_filter(commercial="+ Shop")
        )
        assert [p.city for p in results] == ["Mumbai"]

    async def test_second_page_skips_first_matches(self, property_repository, property_factory, test_owner):
        for _ in range(12):
            await property_factory.create_property(property_repository, test_owner.id)

        everything = await property_repository.filter_properties(build_property_filter(limit=100))
        second_page = await property_repository.filter_properties(build_property_filter(page=2, limit=5))

        assert len(everything) == 12
        assert [p.id for p in second_page] == [p.id for p in everything[5:10]]

    async def test_page_past_the_end_is_empty(self, property_repository, listings):
        results = await property_repository.filter_properties(build_property_filter(page=9, limit=5))
        assert results == []
