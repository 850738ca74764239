"""
Range-Guard Validation Layer

Validates values typed in by operators (control setpoints and manual
data entry) before they are applied or recorded.

Philosophy:
- Hard failures: Physically impossible or beyond a plant limit → Reject
- Soft warnings: Unusual but possible → Accept with warnings
- The goal is to catch typos and unit mistakes, not to second-guess
  the operator
"""

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


# Biomass share of coal mass flow allowed by the fuel permit (%)
COFIRING_RATIO_CEILING = 5.0


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"        # Impossible or forbidden - must reject
    WARNING = "warning"    # Suspicious - accept with warning
    INFO = "info"          # Informational note


@dataclass
class SetpointLimit:
    """Slider limits of one operator control."""
    minimum: float
    maximum: float
    step: float
    unit: str
    default: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Operator controls, defaults are the design operating point
SETPOINT_LIMITS: Dict[str, SetpointLimit] = {
    "coal_flow": SetpointLimit(340.0, 380.0, 0.5, "t/h", 360.0),
    "biomass_flow": SetpointLimit(0.0, 19.0, 0.1, "t/h", 18.0),
    "o2_level": SetpointLimit(2.0, 6.0, 0.1, "%", 3.45),
    "steam_temp": SetpointLimit(500.0, 560.0, 0.5, "°C", 538.5),
    "primary_air": SetpointLimit(150.0, 250.0, 1.0, "t/h", 211.0),
}


@dataclass
class ValidationIssue:
    """
    A single validation issue found in the data.

    Attributes:
        severity: How serious is this issue
        rule_name: Identifier for the rule that was violated
        message: Human-readable description
        metric_name: Which field has the issue
        actual_value: The problematic value
        expected_range: What the value should be
        recommendation: How to fix the issue
    """
    severity: ValidationSeverity
    rule_name: str
    message: str
    metric_name: Optional[str] = None
    actual_value: Optional[float] = None
    expected_range: Optional[str] = None
    recommendation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "severity": self.severity.value,
            "rule_name": self.rule_name,
            "message": self.message,
            "metric_name": self.metric_name,
            "actual_value": self.actual_value,
            "expected_range": self.expected_range,
            "recommendation": self.recommendation,
        }


@dataclass
class ValidationResult:
    """
    Result of validating operator input.

    Attributes:
        is_valid: True if data can be accepted (possibly with warnings)
        status: "accepted", "accepted_with_warnings", or "rejected"
        issues: List of all validation issues found
    """
    is_valid: bool
    status: str
    issues: List[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        errors = [i for i in self.issues if i.severity == ValidationSeverity.ERROR]
        warnings = [i for i in self.issues if i.severity == ValidationSeverity.WARNING]
        infos = [i for i in self.issues if i.severity == ValidationSeverity.INFO]

        return {
            "is_valid": self.is_valid,
            "status": self.status,
            "error_count": len(errors),
            "warning_count": len(warnings),
            "info_count": len(infos),
            "issues": [issue.to_dict() for issue in self.issues],
        }


class RangeGuard:
    """
    Range-based validation guard for operator input.

    Example:
        guard = RangeGuard()
        result = guard.validate_manual_entry({
            "coal_flow": 360.0,
            "biomass_flow": 18.0,   # 5% of coal: at the ceiling
            "o2_level": 3.45,
        })
        print(result.status)  # "accepted"

        result = guard.validate_manual_entry({
            "coal_flow": 360.0,
            "biomass_flow": 30.0,   # 8.3% of coal: over the ceiling
        })
        print(result.status)  # "rejected"
    """

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the range guard.

        Args:
            strict_mode: If True, treat warnings as errors (reject more)
        """
        self.strict_mode = strict_mode

        # Values outside these trigger warnings, not errors
        self.typical_ranges: Dict[str, Tuple[float, float]] = {
            "coal_flow": (340.0, 380.0),        # t/h
            "biomass_flow": (0.0, 19.0),        # t/h
            "steam_temp": (530.0, 545.0),       # °C
            "drum_pressure": (240.0, 255.0),    # bar
            "o2_level": (3.0, 4.0),             # %
            "co_level": (25.0, 70.0),           # ppm
        }

    def validate_manual_entry(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate a manual telemetry entry.

        Args:
            data: Dictionary of field name to value; missing fields are skipped

        Returns:
            ValidationResult with status and any issues found
        """
        issues: List[ValidationIssue] = []

        issues.extend(self._validate_absolute_bounds(data))
        issues.extend(self._validate_cofiring_ceiling(data))
        issues.extend(self._validate_typical_ranges(data))

        return self._result(issues)

    def validate_setpoints(self, setpoints: Dict[str, float]) -> ValidationResult:
        """
        Validate operator control setpoints against the slider limits.

        Unknown setpoints and values outside the limits are errors. A
        biomass share above the cofiring ceiling is only a warning here,
        so coal can be trimmed from the design point without touching
        biomass in the same change.
        """
        issues: List[ValidationIssue] = []

        for name, value in setpoints.items():
            limit = SETPOINT_LIMITS.get(name)

            if limit is None:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name="unknown_setpoint",
                    message=f"{name} is not an operator control",
                    metric_name=name,
                    actual_value=value,
                    expected_range=", ".join(SETPOINT_LIMITS),
                ))
                continue

            if value < limit.minimum or value > limit.maximum:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name=f"{name}_setpoint_range",
                    message=f"{name} setpoint is outside the control range",
                    metric_name=name,
                    actual_value=value,
                    expected_range=f"{limit.minimum} - {limit.maximum} {limit.unit}",
                    recommendation="Move the setpoint back inside the slider limits",
                ))

        issues.extend(
            self._validate_cofiring_ceiling(setpoints, severity=ValidationSeverity.WARNING)
        )

        return self._result(issues)

    def _result(self, issues: List[ValidationIssue]) -> ValidationResult:
        errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
        warnings = [i for i in issues if i.severity == ValidationSeverity.WARNING]

        if errors:
            logger.warning(
                "Rejected input: %s", ", ".join(i.rule_name for i in errors)
            )
            return ValidationResult(is_valid=False, status="rejected", issues=issues)
        elif warnings:
            if self.strict_mode:
                # In strict mode, warnings become errors
                for w in warnings:
                    w.severity = ValidationSeverity.ERROR
                return ValidationResult(is_valid=False, status="rejected", issues=issues)
            return ValidationResult(
                is_valid=True,
                status="accepted_with_warnings",
                issues=issues
            )
        else:
            return ValidationResult(is_valid=True, status="accepted", issues=issues)

    def _validate_absolute_bounds(self, data: Dict[str, Any]) -> List[ValidationIssue]:
        """
        Validate values that cannot be violated under any circumstances.
        """
        issues = []

        # Mass flows and concentrations are magnitudes
        for name, unit in [
            ("coal_flow", "t/h"),
            ("biomass_flow", "t/h"),
            ("drum_pressure", "bar"),
            ("co_level", "ppm"),
        ]:
            value = data.get(name)
            if value is not None and value < 0:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name=f"{name}_non_negative",
                    message=f"{name} cannot be negative",
                    metric_name=name,
                    actual_value=value,
                    expected_range=f">= 0 {unit}",
                    recommendation="Check the sign and units of the entered value"
                ))

        # Flue gas cannot hold more oxygen than air does
        o2_level = data.get("o2_level")
        if o2_level is not None and not 0 <= o2_level <= 21:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                rule_name="o2_level_bounds",
                message="Flue-gas O2 must be between 0% and 21%",
                metric_name="o2_level",
                actual_value=o2_level,
                expected_range="0 - 21 %",
                recommendation="O2 is entered in percent by volume, not ppm or a fraction"
            ))

        return issues

    def _validate_cofiring_ceiling(
        self,
        data: Dict[str, Any],
        severity: ValidationSeverity = ValidationSeverity.ERROR
    ) -> List[ValidationIssue]:
        """Biomass flow may not exceed the cofiring ceiling share of coal flow."""
        coal_flow = data.get("coal_flow")
        biomass_flow = data.get("biomass_flow")

        if coal_flow is None or biomass_flow is None or coal_flow <= 0:
            return []

        ratio = biomass_flow / coal_flow * 100
        if ratio > COFIRING_RATIO_CEILING + 1e-9:
            return [ValidationIssue(
                severity=severity,
                rule_name="cofiring_ratio_ceiling",
                message=f"Cofiring ratio {ratio:.2f}% exceeds the {COFIRING_RATIO_CEILING:g}% ceiling",
                metric_name="biomass_flow",
                actual_value=round(biomass_flow, 2),
                expected_range=f"<= {coal_flow * COFIRING_RATIO_CEILING / 100:.2f} t/h",
                recommendation="Reduce biomass flow or raise coal flow"
            )]

        return []

    def _validate_typical_ranges(self, data: Dict[str, Any]) -> List[ValidationIssue]:
        """
        Check if values are within typical operating ranges.

        These are soft checks: values outside typical ranges are unusual
        but not impossible. They generate warnings or info notes.
        """
        issues = []

        for metric_name, (min_val, max_val) in self.typical_ranges.items():
            value = data.get(metric_name)

            if value is None:
                continue

            if value < min_val or value > max_val:
                # Determine severity based on how far outside range
                if value < min_val:
                    deviation_factor = (min_val - value) / max(abs(min_val), 1)
                else:
                    deviation_factor = (value - max_val) / max(abs(max_val), 1)

                # Large deviations get warnings, small ones get info
                if deviation_factor > 0.05:
                    severity = ValidationSeverity.WARNING
                else:
                    severity = ValidationSeverity.INFO

                issues.append(ValidationIssue(
                    severity=severity,
                    rule_name=f"{metric_name}_typical_range",
                    message=f"{metric_name} is outside typical operating range",
                    metric_name=metric_name,
                    actual_value=round(value, 2),
                    expected_range=f"{min_val} - {max_val}",
                    recommendation=f"Verify the {metric_name} reading and operating conditions"
                ))

        return issues


def validate_manual_entry(data: Dict[str, Any], strict: bool = False) -> ValidationResult:
    """
    Convenience function to validate a manual entry.

    Args:
        data: Field name to value
        strict: If True, treat warnings as errors

    Returns:
        ValidationResult
    """
    return RangeGuard(strict_mode=strict).validate_manual_entry(data)
