import logging
from contextlib import asynccontextmanager
from dataclasses import replace

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import DuplicateKeyError

from compliance import (
    ComplianceEngine,
    ComplianceResult,
    DEFAULT_RULE_SETS,
    IntervalNormalizer,
    RuleConfig,
    WorkInterval,
    adjustment_reason,
    resolve_rule_config,
    time_account_adjustment,
)
from config import DEFAULT_RULE_SET, LOG_LEVEL
from db import init_db, close_db, ComplianceRuleDoc
from schemas import (
    CheckComplianceRequest,
    ComplianceCheckResponse,
    ComplianceRuleResponse,
    ComplianceSummary,
    ComplianceViolationSchema,
    UpdateRuleSetRequest,
    ViolationDetailsSchema,
)
from utils import as_utc, setup_logging, utc_now


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL)
    await init_db()
    yield
    await close_db()


app = FastAPI(title="workTimeCompliance", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

engine = ComplianceEngine()


def _rule_to_response(tenant_id: str, rule_set: str, overrides: dict, config: RuleConfig,
                      updated_at=None, updated_by: str | None = None) -> ComplianceRuleResponse:
    return ComplianceRuleResponse(
        tenant_id=tenant_id,
        rule_set=rule_set,
        config=config.to_dict(),
        overrides=overrides,
        updated_at=updated_at.isoformat() if updated_at else None,
        updated_by=updated_by,
    )


async def _load_rule_doc(tenant_id: str) -> ComplianceRuleDoc:
    """Fetch the tenant's rule doc, creating the default one on first access."""
    rule = await ComplianceRuleDoc.find_one(ComplianceRuleDoc.tenant_id == tenant_id)
    if rule:
        return rule

    rule = ComplianceRuleDoc(
        tenant_id=tenant_id,
        rule_set=DEFAULT_RULE_SET,
        config={},
        updated_by="system",
    )
    try:
        await rule.insert()
    except DuplicateKeyError:
        # A concurrent request created it first
        return await ComplianceRuleDoc.find_one(ComplianceRuleDoc.tenant_id == tenant_id)
    logging.info(f"Created default {DEFAULT_RULE_SET} rule set for tenant {tenant_id}")
    return rule


def _effective_config(tenant_id: str, rule: ComplianceRuleDoc) -> RuleConfig:
    try:
        return resolve_rule_config(rule.rule_set, rule.config)
    except ValueError as e:
        logging.error(f"Stored rule set for tenant {tenant_id} is invalid: {e}")
        raise HTTPException(status_code=500, detail="Stored compliance rules are invalid")


def _collect_intervals(request: CheckComplianceRequest) -> list[WorkInterval]:
    intervals = [i.to_interval() for i in request.intervals]
    try:
        raw = [IntervalNormalizer.from_time_entry(r) for r in request.time_entries]
        raw += [IntervalNormalizer.from_shift_time_entry(r) for r in request.shift_time_entries]
    except (KeyError, ValueError, TypeError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid time entry: {e}")

    for interval in raw:
        intervals.append(replace(
            interval,
            start_time=as_utc(interval.start_time),
            end_time=as_utc(interval.end_time) if interval.end_time else None,
        ))
    return intervals


@app.get("/compliance/rule-sets")
async def get_rule_sets():
    """Get the default config of every rule set."""
    return [config.to_dict() for config in DEFAULT_RULE_SETS.values()]


@app.get("/compliance/rules/{tenant_id}", response_model=ComplianceRuleResponse)
async def get_compliance_rule(tenant_id: str):
    """Get the effective compliance rules of a tenant."""
    rule = await _load_rule_doc(tenant_id)
    config = _effective_config(tenant_id, rule)
    return _rule_to_response(
        tenant_id, config.rule_set.value, rule.config, config, rule.updated_at, rule.updated_by
    )


@app.put("/compliance/rules/{tenant_id}", response_model=ComplianceRuleResponse)
async def update_compliance_rule(tenant_id: str, request: UpdateRuleSetRequest):
    """Select a rule set for a tenant and store its overrides."""
    try:
        config = resolve_rule_config(request.rule_set, request.config)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    rule_set = config.rule_set.value
    overrides = {k: v for k, v in request.config.items() if k != "rule_set"}
    now = utc_now()

    update = {
        "rule_set": rule_set,
        "config": overrides,
        "updated_at": now,
        "updated_by": request.updated_by,
    }

    rule = await ComplianceRuleDoc.find_one(ComplianceRuleDoc.tenant_id == tenant_id)
    if rule:
        await rule.set(update)
    else:
        rule = ComplianceRuleDoc(tenant_id=tenant_id, created_at=now, **update)
        try:
            await rule.insert()
        except DuplicateKeyError:
            rule = await ComplianceRuleDoc.find_one(ComplianceRuleDoc.tenant_id == tenant_id)
            await rule.set(update)

    logging.info(f"Tenant {tenant_id} switched to {rule_set} rules (overrides: {sorted(overrides)})")
    return _rule_to_response(tenant_id, rule_set, overrides, config, now, request.updated_by)


@app.post("/compliance/check/{tenant_id}", response_model=ComplianceCheckResponse)
async def check_compliance(tenant_id: str, request: CheckComplianceRequest):
    """
    Evaluate work intervals of a period against the tenant's rules.

    Intervals are filtered to those starting inside [start_date, end_date]
    (and to user_id when given) and evaluated per user. Violations are
    returned, not stored.
    """
    start_date = as_utc(request.start_date)
    end_date = as_utc(request.end_date)
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    rule = await _load_rule_doc(tenant_id)
    config = _effective_config(tenant_id, rule)

    intervals = IntervalNormalizer.within_window(_collect_intervals(request), start_date, end_date)
    if request.user_id:
        intervals = [i for i in intervals if i.user_id == request.user_id]

    violations_by_user = engine.evaluate_by_user(intervals, config)

    result = ComplianceResult()
    violations: list[ComplianceViolationSchema] = []
    for user_id, user_violations in violations_by_user.items():
        for violation in user_violations:
            result.add_violation(violation)
            data = violation.to_dict()
            violations.append(ComplianceViolationSchema(
                user_id=user_id,
                rule_set=config.rule_set.value,
                violation_type=data["violation_type"],
                severity=data["severity"],
                period_start=data["period_start"],
                period_end=data["period_end"],
                details=ViolationDetailsSchema(**data["details"]),
                time_account_adjustment_hours=time_account_adjustment(violation),
                time_account_adjustment_reason=adjustment_reason(violation),
            ))

    logging.info(
        f"Compliance check for tenant {tenant_id}: {len(intervals)} intervals, "
        f"{len(violations_by_user)} users, {result.error_count} errors, {result.warning_count} warnings"
    )

    return ComplianceCheckResponse(
        rule_set=config.rule_set.value,
        checked_users=list(violations_by_user),
        violations=violations,
        summary=ComplianceSummary(
            total_violations=len(result.violations),
            error_count=result.error_count,
            warning_count=result.warning_count,
            counts_by_type=result.counts_by_type,
            is_compliant=result.is_compliant,
        ),
    )
