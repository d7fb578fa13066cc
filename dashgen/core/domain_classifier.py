"""
Domain Classifier

Guesses the business context of a dataset from its column names.
"""

from typing import Iterable, List, Tuple

from dashgen.core.models import BusinessDomain

# Checked in this order; the first group with a keyword contained in any
# lower-cased column name wins, even when later groups also match.
DOMAIN_RULES: List[Tuple[BusinessDomain, Tuple[str, ...]]] = [
    (BusinessDomain.SALES_COMMERCE, ("revenue", "sales", "profit", "orders")),
    (BusinessDomain.WEB_ANALYTICS, ("users", "sessions", "pageviews", "clicks")),
    (BusinessDomain.HUMAN_RESOURCES, ("employee", "salary", "department", "hire")),
    (BusinessDomain.INVENTORY_MANAGEMENT, ("inventory", "stock", "product", "warehouse")),
    (BusinessDomain.CUSTOMER_SUPPORT, ("customer", "ticket", "support", "issue")),
    (BusinessDomain.MARKETING, ("campaign", "impressions", "ctr", "conversion")),
    (BusinessDomain.FINANCIAL, ("expense", "budget", "cost", "accounting")),
    (BusinessDomain.PROJECT_MANAGEMENT, ("project", "task", "milestone", "deadline")),
]

DOMAIN_DESCRIPTIONS = {
    BusinessDomain.SALES_COMMERCE: "E-commerce/Sales data - Focus on revenue optimization and customer insights",
    BusinessDomain.WEB_ANALYTICS: "Web Analytics - Emphasize user behavior and conversion optimization",
    BusinessDomain.HUMAN_RESOURCES: "Human Resources - Highlight workforce analytics and performance metrics",
    BusinessDomain.INVENTORY_MANAGEMENT: "Inventory Management - Focus on stock levels and supply chain efficiency",
    BusinessDomain.CUSTOMER_SUPPORT: "Customer Support - Emphasize ticket resolution and satisfaction metrics",
    BusinessDomain.MARKETING: "Marketing Analytics - Focus on campaign performance and ROI",
    BusinessDomain.FINANCIAL: "Financial Data - Emphasize budgets, expenses, and financial health",
    BusinessDomain.PROJECT_MANAGEMENT: "Project Management - Focus on timelines, resources, and deliverables",
    BusinessDomain.GENERAL_BUSINESS: "General Business Data - Comprehensive overview with key insights",
}


def _matches(column_names: List[str], keywords: Tuple[str, ...]) -> bool:
    return any(keyword in column for keyword in keywords for column in column_names)


class DomainClassifier:
    """Keyword-priority business domain classification."""

    def __init__(self, rules: List[Tuple[BusinessDomain, Tuple[str, ...]]] = None):
        self.rules = rules if rules is not None else DOMAIN_RULES

    def classify(self, headers: Iterable[str]) -> BusinessDomain:
        """Return the first domain whose keywords match, else general business."""
        column_names = [h.lower() for h in headers]
        for domain, keywords in self.rules:
            if _matches(column_names, keywords):
                return domain
        return BusinessDomain.GENERAL_BUSINESS

    def matching_domains(self, headers: Iterable[str]) -> List[BusinessDomain]:
        """All matching domains in priority order."""
        column_names = [h.lower() for h in headers]
        return [domain for domain, keywords in self.rules if _matches(column_names, keywords)]

    @staticmethod
    def describe(domain: BusinessDomain) -> str:
        return DOMAIN_DESCRIPTIONS.get(domain, DOMAIN_DESCRIPTIONS[BusinessDomain.GENERAL_BUSINESS])
