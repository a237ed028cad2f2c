"""
Default industry table.

Each industry scales the sum of selected service costs by its base
multiplier; every "yes" answer multiplies further, capped at the max.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pricing_estimator.models.enums import ImpactType
from pricing_estimator.models.schemas import IndustryConfig, IndustryQuestion, QuestionImpact


def _q(question_id: str, question: str, description: str, value: float) -> IndustryQuestion:
    return IndustryQuestion(
        id=question_id,
        question=question,
        description=description,
        impact=QuestionImpact(type=ImpactType.MULTIPLIER, value=value),
    )


_INDUSTRIES: dict[str, IndustryConfig] = {
    "farming": IndustryConfig(
        label="Farming / Agriculture",
        description="Unique VAT schemes, seasonal fluctuations, grants/subsidies",
        base_multiplier=1.5,
        max_multiplier=2.0,
        questions=(
            _q("receives-subsidies", "Do you receive government grants?",
               "Affects subsidy accounting complexity", 1.15),
            _q("direct-sales", "Do you sell products directly to consumers?",
               "Affects VAT handling complexity", 1.2),
        ),
    ),
    "consulting": IndustryConfig(
        label="Consulting / Freelancers",
        description="Low transaction volume, simple VAT, few employees",
        base_multiplier=1.0,
        max_multiplier=1.2,
        questions=(
            _q("fixed-price-contracts", "Do you work with fixed-price contracts?",
               "Affects revenue recognition and project accounting", 1.1),
            _q("international-clients", "Do you have international clients?",
               "Affects VAT handling and currency considerations", 1.15),
        ),
    ),
    "tech": IndustryConfig(
        label="Tech / SaaS",
        description="Subscription revenue, investor reporting, reverse VAT",
        base_multiplier=1.2,
        max_multiplier=1.5,
        questions=(
            _q("has-stock-options", "Do you offer stock options to employees?",
               "Affects equity compensation accounting", 1.2),
            _q("has-investors", "Do you have external investors?",
               "Affects reporting requirements and complexity", 1.15),
        ),
    ),
    "ecommerce": IndustryConfig(
        label="E-commerce",
        description="Online sales, inventory management, multiple payment methods",
        base_multiplier=1.3,
        max_multiplier=1.8,
        questions=(
            _q("sells-internationally", "Do you sell to customers outside Norway?",
               "Affects international VAT and customs handling", 1.25),
            _q("multiple-payment-providers", "Do you use multiple payment providers?",
               "Affects payment reconciliation complexity", 1.15),
        ),
    ),
    "retail": IndustryConfig(
        label="Retail",
        description="Physical stores, inventory, POS systems",
        base_multiplier=1.2,
        max_multiplier=1.6,
        questions=(
            _q("sells-lottery-tobacco", "Do you sell lottery tickets or tobacco products?",
               "Affects special reporting requirements", 1.2),
            _q("has-loyalty-program", "Do you have a customer loyalty program?",
               "Affects revenue recognition and customer tracking", 1.15),
        ),
    ),
    "restaurant": IndustryConfig(
        label="Restaurant / Food Service",
        description="Food service, employee tips, alcohol licensing",
        base_multiplier=1.4,
        max_multiplier=1.9,
        questions=(
            _q("serves-alcohol", "Do you serve alcoholic beverages?",
               "Affects licensing and inventory requirements", 1.2),
            _q("distributes-tips", "Do you handle tip distribution to employees?",
               "Affects payroll and tax reporting", 1.15),
        ),
    ),
    "construction": IndustryConfig(
        label="Construction",
        description="Project accounting, subcontractors, progress billing",
        base_multiplier=1.3,
        max_multiplier=1.7,
        questions=(
            _q("has-subcontractors", "Do you work with subcontractors?",
               "Affects contractor management and reporting", 1.2),
            _q("multiple-projects", "Do you handle multiple projects simultaneously?",
               "Affects project accounting complexity", 1.15),
        ),
    ),
    "realestate": IndustryConfig(
        label="Real Estate",
        description="Property management, tenant contracts, maintenance costs",
        base_multiplier=1.2,
        max_multiplier=1.5,
        questions=(
            _q("mixed-property-types", "Do you manage different types of properties?",
               "Affects property management complexity", 1.15),
            _q("has-long-term-tenants", "Do you have long-term rental agreements?",
               "Affects contract management and billing", 1.1),
        ),
    ),
    "transportation": IndustryConfig(
        label="Transportation / Logistics",
        description="Fleet management, route optimization, fuel costs",
        base_multiplier=1.3,
        max_multiplier=1.6,
        questions=(
            _q("operates-fleet", "Do you operate your own vehicle fleet?",
               "Affects asset management and maintenance tracking", 1.2),
            _q("handles-international-freight", "Do you handle international freight?",
               "Affects customs and international regulations", 1.25),
        ),
    ),
    "healthcare": IndustryConfig(
        label="Healthcare",
        description="Patient billing, insurance claims, compliance",
        base_multiplier=1.4,
        max_multiplier=1.8,
        questions=(
            _q("has-insurance-settlements", "Do you handle insurance settlements?",
               "Affects billing and claims processing", 1.2),
            _q("multiple-specialties", "Do you offer multiple medical specialties?",
               "Affects service coding and billing complexity", 1.15),
        ),
    ),
    "financial": IndustryConfig(
        label="Financial Services",
        description="Complex regulations, client funds, reporting requirements",
        base_multiplier=1.5,
        max_multiplier=2.0,
        questions=(
            _q("has-finanstilsynet-reporting", "Are you subject to Finanstilsynet reporting?",
               "Affects regulatory compliance requirements", 1.3),
            _q("manages-client-funds", "Do you manage client funds?",
               "Affects trust accounting and compliance", 1.25),
        ),
    ),
    "creative": IndustryConfig(
        label="Creative / Agency",
        description="Project billing, time tracking, client management",
        base_multiplier=1.1,
        max_multiplier=1.4,
        questions=(
            _q("has-retainer-clients", "Do you work with retainer clients?",
               "Affects recurring billing and contract management", 1.1),
            _q("works-internationally", "Do you work with international clients?",
               "Affects currency handling and VAT considerations", 1.15),
        ),
    ),
}

# Read-only view; copy it before editing
DEFAULT_INDUSTRIES: Mapping[str, IndustryConfig] = MappingProxyType(_INDUSTRIES)
