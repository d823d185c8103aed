"""GET /gigs and GET /gigs/{slug}."""

import json

import pytest

from handlers import gigs
from services.catalog_service import CatalogLookup


@pytest.fixture(autouse=True)
def wired_catalog(monkeypatch, gig_table):
    monkeypatch.setattr(gigs, "_catalog", CatalogLookup(gig_table))


def test_list_gigs():
    resp = gigs.list_handler({}, None)

    assert resp["statusCode"] == 200
    body = json.loads(resp["body"])
    assert body["gigs"][0]["slug"] == "blur-hyde-park"
    assert body["gigs"][0]["bandName"] == "Blur"


def test_get_gig_by_path_parameter():
    resp = gigs.get_handler({"pathParameters": {"slug": "blur-hyde-park"}}, None)

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"])["city"] == "London"


def test_get_gig_falls_back_to_path():
    event = {"requestContext": {"http": {"method": "GET", "path": "/gigs/blur-hyde-park"}}}
    resp = gigs.get_handler(event, None)
    assert resp["statusCode"] == 200


def test_missing_gig_is_404():
    resp = gigs.get_handler({"pathParameters": {"slug": "oasis-knebworth"}}, None)

    assert resp["statusCode"] == 404
    assert json.loads(resp["body"]) == {"error": "Gig not found"}


def test_catalog_outage_is_500(gig_table):
    gig_table.fail = True

    assert gigs.list_handler({}, None)["statusCode"] == 500
    resp = gigs.get_handler({"pathParameters": {"slug": "blur-hyde-park"}}, None)
    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "Internal Server Error"}
