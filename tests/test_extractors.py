from dataclasses import dataclass
from typing import Optional

import pytest

from gymlist.exceptions import InvalidArgumentError
from gymlist.search.extractors import fields, member_fields, payment_fields
from gymlist.search.fuzzy import rank


@dataclass
class Member:
    name: str
    phone: str
    email: Optional[str] = None


@dataclass
class Payment:
    member: Optional[Member]
    invoice_number: Optional[str]


def test_fields_reads_mappings_and_attributes() -> None:
    extract = fields("name", "email")
    assert extract({"name": "Ana", "email": "ana@gym.test"}) == ["Ana", "ana@gym.test"]
    assert extract(Member("Ana", "555", None)) == ["Ana", ""]


def test_fields_follows_dotted_paths() -> None:
    payment = Payment(Member("Ravi Kumar", "555-0142"), "INV-2024-0007")
    assert payment_fields(payment) == ["Ravi Kumar", "INV-2024-0007"]
    assert payment_fields(Payment(None, None)) == ["", ""]
    row = {"member": {"name": "Ana"}, "invoice_number": "INV-1"}
    assert payment_fields(row) == ["Ana", "INV-1"]


def test_fields_stringifies_non_strings() -> None:
    assert fields("phone")({"phone": 5550142}) == ["5550142"]


def test_fields_requires_a_path() -> None:
    with pytest.raises(InvalidArgumentError):
        fields()


def test_member_search_by_phone_and_email() -> None:
    members = [
        Member("Ana Lima", "555-0101", "ana@gym.test"),
        Member("Ravi Kumar", "555-0142", None),
    ]
    assert [m.name for m in rank(members, "0142", member_fields)] == ["Ravi Kumar"]
    assert [m.name for m in rank(members, "ana@", member_fields)] == ["Ana Lima"]
