"""Tests for business domain classification."""

import pytest

from dashgen.core.domain_classifier import DOMAIN_DESCRIPTIONS, DomainClassifier
from dashgen.core.models import BusinessDomain


@pytest.fixture
def classifier():
    return DomainClassifier()


@pytest.mark.parametrize("headers, expected", [
    (["date", "region", "revenue"], BusinessDomain.SALES_COMMERCE),
    (["Total_Revenue_USD"], BusinessDomain.SALES_COMMERCE),
    (["day", "sessions", "bounce"], BusinessDomain.WEB_ANALYTICS),
    (["employee_id", "salary"], BusinessDomain.HUMAN_RESOURCES),
    (["sku", "warehouse"], BusinessDomain.INVENTORY_MANAGEMENT),
    (["Customer_Name", "Ticket"], BusinessDomain.CUSTOMER_SUPPORT),
    (["campaign", "clicks_ratio"], BusinessDomain.WEB_ANALYTICS),
    (["impressions", "spend"], BusinessDomain.MARKETING),
    (["budget", "expense"], BusinessDomain.FINANCIAL),
    (["task", "owner"], BusinessDomain.PROJECT_MANAGEMENT),
    (["alpha", "beta"], BusinessDomain.GENERAL_BUSINESS),
    ([], BusinessDomain.GENERAL_BUSINESS),
])
def test_classify(classifier, headers, expected):
    assert classifier.classify(headers) == expected


def test_first_matching_group_wins(classifier):
    headers = ["product_orders", "stock"]

    assert classifier.classify(headers) == BusinessDomain.SALES_COMMERCE
    assert classifier.matching_domains(headers) == [
        BusinessDomain.SALES_COMMERCE,
        BusinessDomain.INVENTORY_MANAGEMENT,
    ]


def test_marketing_precedes_financial(classifier):
    assert classifier.classify(["campaign", "budget"]) == BusinessDomain.MARKETING


def test_custom_rules():
    classifier = DomainClassifier(rules=[(BusinessDomain.FINANCIAL, ("ledger",))])

    assert classifier.classify(["ledger_entry", "revenue"]) == BusinessDomain.FINANCIAL
    assert classifier.classify(["revenue"]) == BusinessDomain.GENERAL_BUSINESS


def test_every_domain_has_a_description():
    for domain in BusinessDomain:
        assert DomainClassifier.describe(domain) == DOMAIN_DESCRIPTIONS[domain]
