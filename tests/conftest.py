"""Shared fixtures for the sheet exporter tests."""

import pytest

from sheet_exporter.models import HeaderNode


@pytest.fixture
def nested_headers():
    """Three-level tree: Name | Contact(Phone | Address(City | Street))."""
    return [
        HeaderNode(title="Name", key="name"),
        HeaderNode(title="Contact", children=[
            HeaderNode(title="Phone", key="contact.phone", alignment={"horizontal": "left"}),
            HeaderNode(title="Address", children=[
                HeaderNode(title="City", key="address.city"),
                HeaderNode(title="Street", key="address.street"),
            ]),
        ]),
    ]


@pytest.fixture
def org_records():
    return [
        {"orgName": "Acme", "name": "Ann", "age": 31, "phone": "555-0101", "email": "ann@acme.test",
         "city": "Oslo", "dept": "R&D", "role": "Lead", "test": {"aa": "x1", "bb": "y1"}},
        {"orgName": "Acme", "name": "Bob", "age": 28, "phone": "555-0102", "email": "bob@acme.test",
         "city": "Oslo", "dept": "R&D", "role": "Dev", "test": {"aa": "x2", "bb": "y2"}},
        {"orgName": "Acme", "name": "Cid", "age": 45, "phone": "555-0103", "email": "cid@acme.test",
         "city": "Bergen", "dept": "Ops", "role": "Manager", "test": {"aa": "x3"}},
        {"orgName": "Acme", "name": "Dee", "age": 39, "phone": "555-0104", "email": "dee@acme.test",
         "city": "Bergen", "dept": "Ops", "role": "Analyst", "test": {"aa": "x4", "bb": "y4"}},
    ]


@pytest.fixture
def org_headers():
    """One internal node over nine leaves, the last one a two-field composite."""
    return [
        {"title": "Staff Report", "children": [
            {"title": "Organisation", "key": "orgName"},
            {"title": "Name", "key": "name"},
            {"title": "Age", "key": "age"},
            {"title": "Phone", "key": "phone"},
            {"title": "Email", "key": "email", "width": 30},
            {"title": "City", "key": "city"},
            {"title": "Department", "key": "dept"},
            {"title": "Role", "key": "role"},
            {"title": "Test", "property": "test.aa, test.bb"},
        ]},
    ]
