"""Behaviour every ListRepository backend must share."""

import pytest

from sinkhole.lists import DomainList

from .conftest import SEED

ALL_LISTS = list(DomainList)


@pytest.mark.parametrize("domain_list", ALL_LISTS)
def test_get_returns_exactly_the_seeded_values(repository, domain_list):
	assert repository.get(domain_list) == SEED[domain_list]


@pytest.mark.parametrize("domain_list", ALL_LISTS)
def test_contains_existing(repository, domain_list):
	assert repository.contains(domain_list, SEED[domain_list][0])


@pytest.mark.parametrize(
	"domain_list, value",
	[
		(DomainList.ALLOW, "whitelist.com"),
		(DomainList.DENY, "blacklist.com"),
		(DomainList.PATTERN, "regex.com"),
	],
)
def test_add_new(repository, domain_list, value):
	assert value not in repository.get(domain_list)

	repository.add(domain_list, value)

	assert repository.contains(domain_list, value)
	assert value in repository.get(domain_list)


@pytest.mark.parametrize("domain_list", ALL_LISTS)
def test_remove_existing(repository, domain_list):
	value = SEED[domain_list][0]
	assert value in repository.get(domain_list)

	repository.remove(domain_list, value)

	assert value not in repository.get(domain_list)
	assert not repository.contains(domain_list, value)


@pytest.mark.parametrize("domain_list", ALL_LISTS)
def test_remove_is_idempotent(repository, domain_list):
	repository.remove(domain_list, "absent.example")
	repository.remove(domain_list, "absent.example")
	assert not repository.contains(domain_list, "absent.example")

	value = SEED[domain_list][0]
	repository.remove(domain_list, value)
	repository.remove(domain_list, value)
	assert not repository.contains(domain_list, value)


def test_add_existing_keeps_a_single_entry(repository):
	repository.add(DomainList.ALLOW, "test.com")
	repository.add(DomainList.ALLOW, "test.com")

	assert repository.get(DomainList.ALLOW) == ["test.com"]


def test_contains_matches_exact_value_only(repository):
	assert not repository.contains(DomainList.ALLOW, "TEST.COM")
	assert not repository.contains(DomainList.ALLOW, "sub.test.com")
	assert not repository.contains(DomainList.ALLOW, "test.co")


def test_lists_are_isolated(repository):
	repository.add(DomainList.ALLOW, "x.com")

	assert repository.contains(DomainList.ALLOW, "x.com")
	assert not repository.contains(DomainList.DENY, "x.com")
	assert not repository.contains(DomainList.PATTERN, "x.com")
	assert repository.get(DomainList.DENY) == SEED[DomainList.DENY]
	assert repository.get(DomainList.PATTERN) == SEED[DomainList.PATTERN]


def test_remove_does_not_touch_other_lists(repository):
	repository.add(DomainList.DENY, "test.com")

	repository.remove(DomainList.ALLOW, "test.com")

	assert repository.contains(DomainList.DENY, "test.com")


def test_get_matches_contains(repository):
	for value in ("a.com", "b.com", "c.com"):
		repository.add(DomainList.DENY, value)
	repository.remove(DomainList.DENY, "b.com")

	values = repository.get(DomainList.DENY)

	assert set(values) == {"example.com", "a.com", "c.com"}
	for value in values:
		assert repository.contains(DomainList.DENY, value)
	assert not repository.contains(DomainList.DENY, "b.com")


def test_get_order_is_stable(repository):
	for value in ("z.com", "m.com", "a.com"):
		repository.add(DomainList.ALLOW, value)

	assert repository.get(DomainList.ALLOW) == ["test.com", "z.com", "m.com", "a.com"]
	assert repository.get(DomainList.ALLOW) == repository.get(DomainList.ALLOW)


def test_add_get_remove_get_round_trip(repository):
	repository.add(DomainList.ALLOW, "roundtrip.com")
	assert "roundtrip.com" in repository.get(DomainList.ALLOW)

	repository.remove(DomainList.ALLOW, "roundtrip.com")
	assert "roundtrip.com" not in repository.get(DomainList.ALLOW)


def test_value_is_re_addable_after_removal(repository):
	repository.remove(DomainList.PATTERN, r"(^|\.)example\.com$")
	repository.add(DomainList.PATTERN, r"(^|\.)example\.com$")

	assert repository.get(DomainList.PATTERN) == [r"(^|\.)example\.com$"]
