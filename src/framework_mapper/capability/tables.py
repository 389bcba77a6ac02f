"""
Static rule tables for the capability engine.

Loaded once at import and never mutated. Every scoring function in this
package is a generic fold over one of these tables:

  TOOL_TYPE_SIGNATURES       -- tool category -> weighted keyword signature
  DOMAIN_REQUIREMENTS        -- safeguard -> tool categories allowed FULL/PARTIAL
  ROLE_INDICATORS            -- governance / facilitation / validation vocabulary
  IMPLEMENTATION_INDICATORS  -- safeguard -> direct-implementation phrases
  QUALITY_SIGNALS            -- role family -> fixed-increment quality signals
  QUALITY_ELEMENT_SIGNALS    -- implementation roles -> tiered element coverage signals

Table order matters: TOOL_TYPE_SIGNATURES is iterated in definition order and
the first category reaching the top score wins a tie.
"""

from types import MappingProxyType

from .models import (
    CapabilityRole,
    DomainRequirement,
    ElementCoverageSignal,
    QualitySignal,
    ToolCategorySignature,
)

# =============================================================================
# TOOL TYPE SIGNATURES
# =============================================================================

MIN_TOOL_TYPE_SCORE = 2
CONTEXT_AFFINITY_BONUS = 1

TOOL_TYPE_SIGNATURES: tuple[ToolCategorySignature, ...] = (
    ToolCategorySignature(
        category="inventory",
        primary_keywords=(
            "asset management", "asset inventory", "asset discovery",
            "inventory management", "cmdb", "configuration management database",
            "hardware inventory", "software inventory", "it asset management",
        ),
        secondary_keywords=(
            "inventory", "inventories", "asset", "discovery", "hardware",
            "ownership", "device", "endpoint", "tracking",
        ),
        context_affinity=frozenset({"1.1", "1.2", "2.1"}),
    ),
    ToolCategorySignature(
        category="identity_management",
        primary_keywords=(
            "identity management", "identity and access management",
            "access management", "active directory", "single sign-on",
            "directory service", "account management", "privileged access",
            "multi-factor authentication", "identity provider", "identity governance",
        ),
        secondary_keywords=(
            "identity", "account", "user", "authentication", "provisioning",
            "credential", "password", "mfa", "directory", "lifecycle",
        ),
        context_affinity=frozenset({"5.1", "5.2", "5.3", "6.1", "6.2", "6.3"}),
    ),
    ToolCategorySignature(
        category="vulnerability_management",
        primary_keywords=(
            "vulnerability management", "vulnerability scanning",
            "vulnerability scanner", "vulnerability assessment",
            "patch management", "penetration testing", "security scanning",
        ),
        secondary_keywords=(
            "vulnerability", "vulnerabilities", "scanner", "scanning", "patch",
            "cve", "cvss", "remediation", "exploit",
        ),
        context_affinity=frozenset({"7.1", "7.2", "7.3", "7.4", "7.5", "7.6", "7.7"}),
    ),
    ToolCategorySignature(
        category="threat_intelligence",
        primary_keywords=(
            "threat intelligence", "threat intel", "threat feed",
            "indicators of compromise", "threat hunting", "threat correlation",
            "threat actor",
        ),
        secondary_keywords=(
            "threat", "adversary", "malicious", "risks", "attack", "dark web",
        ),
    ),
    ToolCategorySignature(
        category="network_security",
        primary_keywords=(
            "firewall", "network access control", "intrusion detection",
            "intrusion prevention", "network segmentation", "network security",
            "vpn", "secure web gateway",
        ),
        secondary_keywords=(
            "network", "traffic", "packet", "segmentation", "quarantine", "dns", "proxy",
        ),
        context_affinity=frozenset({"4.4", "4.5", "12.2", "13.3", "13.4"}),
    ),
    ToolCategorySignature(
        category="governance",
        primary_keywords=(
            "grc", "governance, risk", "policy management", "compliance management",
            "risk management", "governance platform", "audit management",
        ),
        secondary_keywords=(
            "policy", "policies", "governance", "compliance", "regulatory",
            "framework", "documentation", "approval", "workflow",
        ),
    ),
    ToolCategorySignature(
        category="security_analytics",
        primary_keywords=(
            "siem", "security analytics", "log management", "event correlation",
            "security information and event management", "security orchestration",
            "soar", "ueba",
        ),
        secondary_keywords=(
            "logging", "audit logs", "analytics", "correlation", "alerting",
            "monitoring", "events", "dashboard", "telemetry",
        ),
        context_affinity=frozenset({"8.2", "8.9", "8.11", "13.1"}),
    ),
)

TOOL_CATEGORIES: tuple[str, ...] = tuple(s.category for s in TOOL_TYPE_SIGNATURES)


# =============================================================================
# DOMAIN REQUIREMENTS
# =============================================================================

DOMAIN_REQUIREMENTS: MappingProxyType = MappingProxyType({
    "1.1": DomainRequirement(
        safeguard_id="1.1",
        domain_name="Enterprise Asset Inventory",
        required_tool_types=frozenset({"inventory"}),
    ),
    "2.1": DomainRequirement(
        safeguard_id="2.1",
        domain_name="Software Inventory",
        required_tool_types=frozenset({"inventory"}),
    ),
    "5.1": DomainRequirement(
        safeguard_id="5.1",
        domain_name="Account Inventory",
        required_tool_types=frozenset({"identity_management"}),
    ),
    "6.3": DomainRequirement(
        safeguard_id="6.3",
        domain_name="Multi-Factor Authentication",
        required_tool_types=frozenset({"identity_management"}),
    ),
    "7.1": DomainRequirement(
        safeguard_id="7.1",
        domain_name="Vulnerability Management",
        required_tool_types=frozenset({"vulnerability_management"}),
    ),
})


# =============================================================================
# ROLE INDICATOR GROUPS (which role does the text evidence?)
# =============================================================================

GOVERNANCE_INDICATORS: tuple[str, ...] = (
    "policy", "policies", "manage", "process", "workflow", "governance", "grc",
    "compliance management", "documented", "establish", "maintain", "procedure",
    "control", "controls", "framework", "standard", "enterprise risk management",
    "centralized management", "oversight",
)

FACILITATION_INDICATORS: tuple[str, ...] = (
    "improve", "enhance", "optimize", "faster", "better", "stronger", "automate",
    "streamline", "efficiency", "facilitate", "support", "enable", "accelerate",
    "api", "integration", "data", "export", "import", "sync", "feed",
    "provides data", "data source", "data feeds", "enrichment", "data enrichment",
    "supplemental data", "additional data", "contextual data", "threat data",
    "intelligence feeds", "data aggregation", "data collection", "data gathering",
    "feeds data", "populates", "informs", "enriches", "supplements",
    "enables compliance", "facilitates implementation", "supports compliance",
    "creates framework", "enables organizations", "infrastructure", "foundation",
    "template", "templates", "workflow automation", "orchestration",
)

VALIDATION_INDICATORS: tuple[str, ...] = (
    "audit", "report", "evidence", "verify", "validate", "check", "monitor",
    "compliance", "compliance report", "assessment", "logging", "tracking",
    "review", "attest", "dashboard", "metrics", "analytics", "visibility",
    "alert", "attestation", "compliance tracking", "audit trail",
    "reporting capabilities", "audit capabilities",
)

ROLE_INDICATORS: MappingProxyType = MappingProxyType({
    CapabilityRole.GOVERNANCE: GOVERNANCE_INDICATORS,
    CapabilityRole.FACILITATES: FACILITATION_INDICATORS,
    CapabilityRole.VALIDATES: VALIDATION_INDICATORS,
})

ROLE_THRESHOLD = 0.2
FULL_THRESHOLD = 0.5

# Safeguards without an entry score 0.0 for direct implementation.
IMPLEMENTATION_INDICATORS: MappingProxyType = MappingProxyType({
    "1.1": (
        "automated discovery", "asset inventory", "software inventory",
        "hardware", "ownership", "bi-annual", "up-to-date", "enterprise assets",
    ),
    "1.2": (
        "unauthorized assets", "unauthorized devices", "quarantine",
        "remove the asset", "deny", "weekly", "rogue",
    ),
    "1.3": (
        "active discovery", "network scan", "discover assets", "daily",
        "identify assets",
    ),
    "2.1": (
        "software inventory", "licensed software", "installed software",
        "publisher", "business purpose", "install date", "decommission",
    ),
    "5.1": (
        "account inventory", "inventory of accounts", "user accounts",
        "administrator accounts", "privileged accounts", "username",
        "start/stop dates", "quarterly",
    ),
    "6.3": (
        "multi-factor", "mfa", "externally-exposed", "single sign-on",
        "enforce mfa", "third-party applications", "conditional access",
    ),
    "7.1": (
        "vulnerability management process", "vulnerability assessment",
        "remediation", "scanning", "patch management", "documented process",
        "annual review",
    ),
    "8.2": (
        "audit log", "collect logs", "log collection", "event logs",
        "log retention", "centralized logging",
    ),
})


# =============================================================================
# QUALITY SIGNALS (how well is the detected role executed?)
# =============================================================================

IMPLEMENTATION_SIGNALS: tuple[QualitySignal, ...] = (
    QualitySignal(
        name="safeguard_coverage",
        phrases=(),
        weight=0.4,
        evidence="Direct coverage of safeguard requirements",
        gap="Limited evidence of direct safeguard implementation",
        primary=True,
        safeguard_specific=True,
    ),
    QualitySignal(
        name="comprehensiveness",
        phrases=("comprehensive", "complete", "all enterprise", "entire", "end-to-end", "detailed"),
        weight=0.2,
        evidence="Comprehensive scope",
    ),
    QualitySignal(
        name="automation",
        phrases=("automated", "automatic", "automate", "automation", "continuous", "real-time"),
        weight=0.2,
        evidence="Automated execution",
    ),
    QualitySignal(
        name="lifecycle",
        phrases=("review", "maintain", "documented", "procedure", "process", "policy"),
        weight=0.2,
        evidence="Ongoing maintenance and review",
    ),
)

FACILITATION_SIGNALS: tuple[QualitySignal, ...] = (
    QualitySignal(
        name="facilitation",
        phrases=("enhance", "improve", "optimize", "enable", "support", "facilitate", "streamline"),
        weight=0.4,
        evidence="Clear facilitation capabilities",
        gap="Limited evidence of facilitation capabilities",
        primary=True,
    ),
    QualitySignal(
        name="integration",
        phrases=("api", "integration", "data feed", "export", "import", "sync"),
        weight=0.3,
        evidence="Integration and data sharing capabilities",
    ),
    QualitySignal(
        name="automation",
        phrases=("automate", "automated", "orchestration", "workflow"),
        weight=0.3,
        evidence="Automation and workflow capabilities",
    ),
)

GOVERNANCE_SIGNALS: tuple[QualitySignal, ...] = (
    QualitySignal(
        name="policy",
        phrases=("policy", "policies", "procedure", "standard", "framework"),
        weight=0.4,
        evidence="Policy and procedure management",
        gap="Limited governance capabilities evident",
        primary=True,
    ),
    QualitySignal(
        name="process",
        phrases=("process", "workflow", "governance", "management", "oversight"),
        weight=0.3,
        evidence="Process and workflow capabilities",
    ),
    QualitySignal(
        name="compliance",
        phrases=("compliance", "grc", "audit", "risk management"),
        weight=0.3,
        evidence="Compliance and risk management features",
    ),
)

VALIDATION_SIGNALS: tuple[QualitySignal, ...] = (
    QualitySignal(
        name="audit",
        phrases=("audit", "audit trail", "evidence", "verification", "validation"),
        weight=0.4,
        evidence="Audit and evidence collection capabilities",
        gap="Limited validation and evidence capabilities",
        primary=True,
    ),
    QualitySignal(
        name="reporting",
        phrases=("report", "reporting", "dashboard", "metrics", "analytics"),
        weight=0.3,
        evidence="Reporting and analytics features",
    ),
    QualitySignal(
        name="monitoring",
        phrases=("monitor", "monitoring", "tracking", "logging", "alerting"),
        weight=0.3,
        evidence="Monitoring and tracking capabilities",
    ),
)

QUALITY_SIGNALS: MappingProxyType = MappingProxyType({
    CapabilityRole.FULL: IMPLEMENTATION_SIGNALS,
    CapabilityRole.PARTIAL: IMPLEMENTATION_SIGNALS,
    CapabilityRole.FACILITATES: FACILITATION_SIGNALS,
    CapabilityRole.GOVERNANCE: GOVERNANCE_SIGNALS,
    CapabilityRole.VALIDATES: VALIDATION_SIGNALS,
})

# Applied on top of QUALITY_SIGNALS for the implementation roles only.
ELEMENT_COVERAGE_SIGNALS: tuple[ElementCoverageSignal, ...] = (
    ElementCoverageSignal(
        name="core_coverage",
        element_field="core_requirements",
        tiers=(
            (0.5, 0.4, "Strong coverage of core requirements"),
            (0.2, 0.2, "Partial coverage of core requirements"),
        ),
    ),
    ElementCoverageSignal(
        name="sub_element_coverage",
        element_field="sub_taxonomical_elements",
        tiers=((0.3, 0.3, "Good coverage of sub-taxonomical elements"),),
    ),
    ElementCoverageSignal(
        name="governance_element_coverage",
        element_field="governance_elements",
        tiers=((0.3, 0.3, "Addresses governance requirements"),),
    ),
)

QUALITY_ELEMENT_SIGNALS: MappingProxyType = MappingProxyType({
    CapabilityRole.FULL: ELEMENT_COVERAGE_SIGNALS,
    CapabilityRole.PARTIAL: ELEMENT_COVERAGE_SIGNALS,
})

QUALITY_BUCKETS: tuple[tuple[float, str], ...] = (
    (0.8, "excellent"),
    (0.6, "good"),
    (0.4, "fair"),
)


# =============================================================================
# USER-FACING TEMPLATES
# =============================================================================

ROLE_DESCRIPTIONS: MappingProxyType = MappingProxyType({
    CapabilityRole.FULL: "directly implements the complete safeguard functionality",
    CapabilityRole.PARTIAL: "implements specific aspects of the safeguard with defined scope",
    CapabilityRole.FACILITATES: "enhances and enables safeguard implementation by other tools or processes",
    CapabilityRole.GOVERNANCE: "provides policy, process management, and oversight capabilities",
    CapabilityRole.VALIDATES: "provides evidence collection, audit, and compliance validation capabilities",
})

QUALITY_DESCRIPTIONS: MappingProxyType = MappingProxyType({
    "excellent": "comprehensive and well-implemented",
    "good": "solid and effective",
    "fair": "basic but functional",
    "poor": "limited or unclear",
})

RECOMMENDED_USE: MappingProxyType = MappingProxyType({
    CapabilityRole.FULL: (
        "Use as the primary implementation tool for {title}. "
        "Ensure comprehensive deployment and configuration."
    ),
    CapabilityRole.PARTIAL: (
        "Use as a component within a broader safeguard implementation strategy. "
        "Supplement with additional tools or processes."
    ),
    CapabilityRole.FACILITATES: (
        "Use to enhance and optimize existing safeguard implementation. "
        "Integrate with primary implementation tools."
    ),
    CapabilityRole.GOVERNANCE: (
        "Use for policy management, process oversight, and compliance "
        "framework establishment for {title}."
    ),
    CapabilityRole.VALIDATES: (
        "Use for evidence collection, audit preparation, and compliance "
        "validation of {title} implementation."
    ),
})

ROLE_RECOMMENDATIONS: MappingProxyType = MappingProxyType({
    CapabilityRole.FULL: (
        "Document how the tool covers every requirement of {title}, "
        "including configuration and deployment scope"
    ),
    CapabilityRole.PARTIAL: (
        "State which parts of {title} the tool covers and pair it with "
        "tools or processes for the remainder"
    ),
    CapabilityRole.FACILITATES: (
        "Focus on how the tool enables or enhances implementation of {title} "
        "by the primary implementing tools"
    ),
    CapabilityRole.GOVERNANCE: (
        "Combine with technical implementation tools; position the tool as "
        "policy and oversight support for {title}"
    ),
    CapabilityRole.VALIDATES: (
        "Pair with the implementing tools and describe the audit trails and "
        "reports the tool produces for {title}"
    ),
})
