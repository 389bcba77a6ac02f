"""
Capability classification and domain validation engine.

Components (leaf-first):
- tables.py: static keyword, domain and quality signal tables
- tool_type.py: ToolTypeDetector (what kind of product is described)
- classifier.py: CapabilityClassifier (which role the text evidences)
- quality.py: CapabilityQualityAssessor (how well that role is evidenced)
- domain.py: DomainValidator (auto-downgrade of out-of-domain FULL/PARTIAL claims)
- alignment.py: AlignmentScorer (claimed vs effective vs detected)
- pipeline.py: CapabilityEngine wiring the above together
"""

from .alignment import AlignmentScorer
from .classifier import CapabilityClassifier
from .domain import DomainValidator
from .models import (
    UNKNOWN_TOOL_TYPE,
    CapabilityRole,
    ClassificationResult,
    Detected,
    DomainRequirement,
    NoSignal,
    QualityAssessment,
    Safeguard,
    ValidationResult,
    ValidationStatus,
    VendorAnalysis,
)
from .pipeline import (
    CapabilityEngine,
    QualityStrategy,
    RoleClassificationStrategy,
    ToolTypeStrategy,
)
from .quality import CapabilityQualityAssessor
from .tool_type import ToolTypeDetector

__all__ = [
    "AlignmentScorer",
    "CapabilityClassifier",
    "CapabilityEngine",
    "CapabilityQualityAssessor",
    "CapabilityRole",
    "ClassificationResult",
    "Detected",
    "DomainRequirement",
    "DomainValidator",
    "NoSignal",
    "QualityAssessment",
    "QualityStrategy",
    "RoleClassificationStrategy",
    "Safeguard",
    "ToolTypeDetector",
    "ToolTypeStrategy",
    "UNKNOWN_TOOL_TYPE",
    "ValidationResult",
    "ValidationStatus",
    "VendorAnalysis",
]
