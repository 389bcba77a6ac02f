"""
Eval graders -- deterministic checks over engine results.

- ResultGrader: named check functions, with a preset for ValidationResult invariants
"""

from .result_grader import GradeResult, ResultGrader
