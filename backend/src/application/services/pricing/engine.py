"""
Pricing Engine
Computes the price of a job posting from a base price table, data-driven
discount/increase rules and an optional promotional campaign.

The engine is a pure computation: it never touches storage. Loading rules and
campaigns, persisting the result and counting campaign uses belong to the
caller (see JobService).
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Mapping, Optional

from loguru import logger

from core.exceptions import ConfigurationException
from domain.entities import BusinessCampaign, PricingRule
from domain.enums import (
    AdjustmentKind,
    AdjustmentMode,
    CampaignDiscountType,
    TargetAudience,
)
from domain.value_objects import JobPricing, PriceAdjustment

from .conditions import conditions_match
from .context import EmployerContext, JobDraft, flatten_context


def round_money(amount: float) -> float:
    """Round half-up to cents"""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class PriceTable:
    """Base price lookup keyed by posting tier"""

    def __init__(self, prices: Mapping[str, float]):
        self._prices = dict(prices)

    def resolve(self, draft: JobDraft) -> float:
        tier = draft.tier.value if hasattr(draft.tier, "value") else str(draft.tier)
        price = self._prices.get(tier)
        if price is None:
            raise ConfigurationException(f"No base price configured for tier '{tier}'")
        if price < 0:
            raise ConfigurationException(f"Base price for tier '{tier}' is negative")
        return float(price)


class PricingEngine:
    """
    Evaluates pricing rules and campaigns for a job draft.

    Order of evaluation:
    1. base price from the price table
    2. free-posting employers short-circuit to a zero price
    3. currently valid rules, highest priority first; every matching rule
       contributes its discount or increase to the running price
    4. the campaign, if given and applicable, is applied last
    """

    def __init__(self, price_table: PriceTable, currency: str = "EUR"):
        self.price_table = price_table
        self.currency = currency

    def compute_pricing(
        self,
        draft: JobDraft,
        employer: EmployerContext,
        rules: Iterable[PricingRule],
        campaign: Optional[BusinessCampaign] = None,
        now: Optional[datetime] = None,
    ) -> JobPricing:
        """Compute the price breakdown for a single draft"""
        now = now or datetime.utcnow()
        base_price = round_money(self.price_table.resolve(draft))

        if employer.free_posting_enabled:
            return JobPricing(
                base_price=base_price,
                discount=base_price,
                price_increase=0.0,
                final_price=0.0,
                free_posting=True,
                currency=self.currency,
            )

        context = flatten_context(draft, employer)
        discount = 0.0
        increase = 0.0
        applied_rules: List[str] = []
        adjustments: List[PriceAdjustment] = []

        # sorted() is stable, equal priorities keep their input order
        ordered = sorted(
            (r for r in rules if r.is_currently_valid(now)),
            key=lambda r: r.priority,
            reverse=True,
        )
        for rule in ordered:
            if not conditions_match(rule.conditions, context):
                continue

            running = base_price - discount + increase
            amount = self._effect_amount(rule.effect.mode, rule.effect.value, running)
            if rule.effect.kind == AdjustmentKind.DISCOUNT:
                amount = round_money(min(amount, running))
                discount = round_money(discount + amount)
            else:
                increase = round_money(increase + amount)

            applied_rules.append(str(rule.id))
            adjustments.append(PriceAdjustment(
                source="rule",
                source_id=str(rule.id),
                name=rule.name,
                kind=rule.effect.kind,
                amount=amount,
            ))
            logger.debug(f"Pricing rule '{rule.name}' applied: {rule.effect.kind.value} {amount}")

        campaign_applied = None
        if campaign is not None:
            running = base_price - discount + increase
            if self.campaign_applies(campaign, draft, employer, running, now):
                amount = round_money(min(self._campaign_amount(campaign, running), running))
                discount = round_money(discount + amount)
                campaign_applied = str(campaign.id)
                adjustments.append(PriceAdjustment(
                    source="campaign",
                    source_id=str(campaign.id),
                    name=campaign.name,
                    kind=AdjustmentKind.DISCOUNT,
                    amount=amount,
                ))

        final_price = round_money(max(0.0, base_price - discount + increase))

        return JobPricing(
            base_price=base_price,
            discount=discount,
            price_increase=increase,
            final_price=final_price,
            applied_rules=tuple(applied_rules),
            campaign_applied=campaign_applied,
            currency=self.currency,
            adjustments=tuple(adjustments),
        )

    def quote(
        self,
        draft: JobDraft,
        employer: EmployerContext,
        rules: Iterable[PricingRule],
        campaigns: Iterable[BusinessCampaign] = (),
        now: Optional[datetime] = None,
    ) -> JobPricing:
        """
        Price a draft choosing at most one campaign.

        Campaigns are tried largest discount first; the first one that applies
        wins. Without an applicable campaign the rules-only price is returned.
        """
        now = now or datetime.utcnow()
        rules = list(rules)
        for campaign in sorted(campaigns, key=lambda c: c.discount, reverse=True):
            pricing = self.compute_pricing(draft, employer, rules, campaign, now)
            if pricing.campaign_applied is not None or pricing.free_posting:
                return pricing
        return self.compute_pricing(draft, employer, rules, None, now)

    def campaign_applies(
        self,
        campaign: BusinessCampaign,
        draft: JobDraft,
        employer: EmployerContext,
        running_price: float,
        now: Optional[datetime] = None,
    ) -> bool:
        """Check schedule, capacity, audience, location and minimum price"""
        if not campaign.is_running(now):
            return False
        if running_price < campaign.min_job_price:
            return False
        if campaign.location_filter and draft.location.city not in campaign.location_filter:
            return False

        audience = campaign.target_audience
        if audience == TargetAudience.NEW_EMPLOYERS:
            return employer.posted_jobs_count == 0
        if audience == TargetAudience.RETURNING_EMPLOYERS:
            return employer.posted_jobs_count > 0
        if audience == TargetAudience.ENTERPRISE:
            return employer.company_size == "large"
        if audience == TargetAudience.SPECIFIC_INDUSTRY:
            category = draft.category.value if hasattr(draft.category, "value") else draft.category
            return category in campaign.industry_filter
        return True

    @staticmethod
    def _effect_amount(mode: AdjustmentMode, value: float, running: float) -> float:
        if mode == AdjustmentMode.PERCENTAGE:
            return round_money(max(0.0, running) * value / 100)
        return round_money(value)

    @staticmethod
    def _campaign_amount(campaign: BusinessCampaign, running: float) -> float:
        if campaign.discount_type == CampaignDiscountType.PERCENTAGE:
            return round_money(max(0.0, running) * campaign.discount / 100)
        return round_money(campaign.discount)
