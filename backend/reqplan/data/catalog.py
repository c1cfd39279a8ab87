"""Default reference catalog (activities, drivers, risks, contingency bands)."""
from functools import lru_cache

from reqplan.models.catalog import Activity, Catalog, ContingencyBand, Driver, Risk

ACTIVITIES = (
    Activity(activity_code="ANL_ALIGN", display_name="Analysis Alignment", driver_group="Analysis", base_days="0.5"),
    Activity(activity_code="DV_FIELD", display_name="Dataverse Field Creation", driver_group="Dataverse", base_days="0.25"),
    Activity(activity_code="DV_FORM", display_name="Dataverse Form Design", driver_group="Dataverse", base_days="0.5"),
    Activity(activity_code="WF_HOOK", display_name="Workflow Hook", driver_group="Dataverse", base_days="0.5"),
    Activity(activity_code="PA_FLOW", display_name="Power Automate Flow", driver_group="Automation", base_days="0.5"),
    Activity(activity_code="PA_CHILD", display_name="Power Automate Child Flow", driver_group="Automation", base_days="0.25"),
    Activity(activity_code="MAIL_TEMP", display_name="Email Template", driver_group="Comms", base_days="0.25"),
    Activity(activity_code="RECIP_CONF", display_name="Recipient Configuration", driver_group="Comms", base_days="0.25"),
    Activity(activity_code="E2E_TEST", display_name="End-to-End Testing", driver_group="Quality", base_days="0.5"),
    Activity(activity_code="UAT_RUN", display_name="User Acceptance Testing", driver_group="Quality", base_days="0.5"),
    Activity(activity_code="DOC_HAND", display_name="Documentation & Handover", driver_group="Governance", base_days="0.25"),
    Activity(activity_code="DEPLOY", display_name="Deploy DEV>TEST>PROD", driver_group="Governance", base_days="0.25"),
    Activity(activity_code="KPI_RPT", display_name="Reporting/KPI Adjustment", driver_group="Analytics", base_days="0.5"),
)

DRIVERS = (
    Driver(driver="complexity", option="Low", multiplier="0.8", explanation="Simple requirement, linear logic"),
    Driver(driver="complexity", option="Medium", multiplier="1.0", explanation="Standard complexity, some conditions"),
    Driver(driver="complexity", option="High", multiplier="1.5", explanation="Complex logic, many conditions and exceptions"),
    Driver(driver="environments", option="1 env", multiplier="0.7", explanation="Development environment only"),
    Driver(driver="environments", option="2 env", multiplier="1.0", explanation="Dev + Test or Dev + Prod"),
    Driver(driver="environments", option="3 env", multiplier="1.3", explanation="Full Dev + Test + Prod"),
    Driver(driver="reuse", option="High", multiplier="0.6", explanation="Heavy reuse of existing components"),
    Driver(driver="reuse", option="Medium", multiplier="1.0", explanation="Partial reuse of components"),
    Driver(driver="reuse", option="Low", multiplier="1.2", explanation="Mostly new development"),
    Driver(driver="stakeholders", option="1 team", multiplier="0.8", explanation="Single team involved"),
    Driver(driver="stakeholders", option="2-3 team", multiplier="1.0", explanation="Coordination across a few teams"),
    Driver(driver="stakeholders", option="4+ team", multiplier="1.3", explanation="Complex multi-team coordination"),
)

RISKS = (
    Risk(risk_id="T001", risk_item="Untested premium connectors", category="Technical", weight=4),
    Risk(risk_id="T002", risk_item="API limits / throttling", category="Technical", weight=5),
    Risk(risk_id="T003", risk_item="Performance on large datasets", category="Technical", weight=5),
    Risk(risk_id="T004", risk_item="Complex custom plugins", category="Technical", weight=6),
    Risk(risk_id="B001", risk_item="Unstable requirements / scope creep", category="Business", weight=5),
    Risk(risk_id="B002", risk_item="Stakeholders unavailable", category="Business", weight=4),
    Risk(risk_id="B003", risk_item="Limited team skills", category="Business", weight=5),
    Risk(risk_id="G001", risk_item="Unclear licensing", category="Governance", weight=4),
    Risk(risk_id="G002", risk_item="ALM pipeline not configured", category="Governance", weight=5),
    Risk(risk_id="G003", risk_item="Security/DLP policy blocks", category="Governance", weight=6),
    Risk(risk_id="I001", risk_item="Undocumented legacy systems", category="Integration", weight=5),
    Risk(risk_id="I002", risk_item="External team dependencies", category="Integration", weight=4),
    Risk(risk_id="I003", risk_item="Network/firewall restrictions", category="Integration", weight=4),
)

CONTINGENCY_BANDS = (
    ContingencyBand(band="Low", max_score=10, contingency_pct="0.10"),
    ContingencyBand(band="Medium", max_score=20, contingency_pct="0.20"),
    ContingencyBand(band="High", max_score=None, contingency_pct="0.35"),
)


@lru_cache
def default_catalog() -> Catalog:
    return Catalog(
        activities=ACTIVITIES,
        drivers=DRIVERS,
        risks=RISKS,
        contingency_bands=CONTINGENCY_BANDS,
        catalog_version="v1.0",
        drivers_version="v1.0",
        riskmap_version="v1.0",
    )
