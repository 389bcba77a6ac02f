"""Vendor texts shared by the eval tasks."""

SCENARIO_A = (
    "comprehensive automated discovery, detailed hardware/software inventory, "
    "ownership records, bi-annual review"
)
SCENARIO_B = (
    "vulnerability scanner performs comprehensive network discovery and "
    "maintains detailed device databases"
)
SCENARIO_C = "we help track computers and provide some visibility"

GRC_TEXT = (
    "Our GRC platform provides comprehensive policy management, compliance tracking, "
    "audit management, and governance workflows for asset inventory processes including "
    "documentation, approval workflows, and regulatory compliance reporting."
)
VULN_TEXT = (
    "Our vulnerability management solution performs comprehensive security scanning, "
    "patch management automation, vulnerability assessment reporting, and penetration "
    "testing capabilities with detailed remediation guidance and compliance tracking."
)
IDENTITY_TEXT = (
    "Our identity management system maintains comprehensive user account inventories "
    "including privileged accounts, tracks account lifecycle events, and provides basic "
    "reporting on account status and access patterns with active directory integration."
)
THREAT_INTEL_TEXT = (
    "Our threat intelligence service provides comprehensive network scanning, identifies "
    "potential security risks across enterprise infrastructure, maintains detailed device "
    "databases, and offers complete visibility into network-connected assets with advanced "
    "threat correlation capabilities."
)

ALL_TEXTS = [
    SCENARIO_A,
    SCENARIO_B,
    SCENARIO_C,
    GRC_TEXT,
    VULN_TEXT,
    IDENTITY_TEXT,
    THREAT_INTEL_TEXT,
]
