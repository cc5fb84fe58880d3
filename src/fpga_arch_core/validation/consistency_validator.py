# src/fpga_arch_core/validation/consistency_validator.py
from __future__ import annotations

import logging
from typing import List, TYPE_CHECKING

from ..arch_enums import ChannelKind, FcType, RouteType
from ..constants import DETAILED_ONLY_FIELDS, FIELD_NAMES, PIN_FIELDS
from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import ArchIssueCode

if TYPE_CHECKING:
    from ..parser.loader import ParseContext

logger = logging.getLogger(__name__)


class ConsistencyValidator:
    """
    Checks a loaded `ParseContext` before it is frozen into an architecture.

    Every mandatory field must have been set exactly once and at least one pin
    statement must exist. In detailed routing mode the Fc and switch block
    fields become mandatory too, both channels must be uniform with the same
    peak as `chan_width_io`, and the Fc values must fit their Fc type. Those
    cross-field checks only run once the presence checks have passed, because
    they read the values the presence checks vouch for.
    """

    def __init__(self, context: ParseContext, route_type: RouteType):
        self.context = context
        self.route_type = route_type
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Returns all issues found (errors and info messages). The caller decides
        whether error-level issues abort the parse.
        """
        self.issues = []
        logger.info(f"Validating architecture '{self.context.source}' for {self.route_type.value} routing...")

        self._check_field_presence()
        if self.route_type is RouteType.DETAILED:
            if not self._has_errors():
                self._check_detailed_routing()
        else:
            self._note_ignored_detailed_fields()

        errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
        if errors:
            logger.info(f"Validation complete. Found {errors} error(s).")
        else:
            logger.info("Validation complete with no errors found.")
        return self.issues

    def _has_errors(self) -> bool:
        return any(i.level == ValidationIssueLevel.ERROR for i in self.issues)

    def _add_issue(self, level: ValidationIssueLevel, code_enum: ArchIssueCode, **kwargs):
        kwargs.setdefault('source', self.context.source)
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            field_name=kwargs.get('field_name'), details=kwargs
        ))

    def _mandatory_fields(self) -> List[str]:
        if self.route_type is RouteType.DETAILED:
            return [name for name in FIELD_NAMES if name not in PIN_FIELDS]
        return [name for name in FIELD_NAMES if name not in PIN_FIELDS and name not in DETAILED_ONLY_FIELDS]

    def _check_field_presence(self):
        counters = self.context.counters
        for name in self._mandatory_fields():
            count = counters.count(name)
            if count == 0:
                self._add_issue(ValidationIssueLevel.ERROR, ArchIssueCode.MISSING_FIELD, field_name=name)
            elif count > 1:
                self._add_issue(
                    ValidationIssueLevel.ERROR, ArchIssueCode.DUPLICATE_FIELD,
                    field_name=name, count=count, lines=counters.lines(name),
                )

        if sum(counters.count(name) for name in PIN_FIELDS) < 1:
            self._add_issue(ValidationIssueLevel.ERROR, ArchIssueCode.NO_PINS_DEFINED)

    def _check_detailed_routing(self):
        ctx = self.context
        chan_x, chan_y = ctx.chan_x, ctx.chan_y

        # The routing resource graph is only built for uniform, equal-width fabrics.
        if chan_x.kind is not ChannelKind.UNIFORM or chan_y.kind is not ChannelKind.UNIFORM:
            self._add_issue(
                ValidationIssueLevel.ERROR, ArchIssueCode.INCONSISTENT_DETAILED_ROUTING,
                reason=(
                    "Detailed routing is only supported with uniform channels; got "
                    f"chan_width_x {chan_x.kind.value} and chan_width_y {chan_y.kind.value}."
                ),
                chan_x_kind=chan_x.kind.value, chan_y_kind=chan_y.kind.value,
            )
        elif chan_x.peak != chan_y.peak or chan_x.peak != ctx.chan_width_io:
            self._add_issue(
                ValidationIssueLevel.ERROR, ArchIssueCode.INCONSISTENT_DETAILED_ROUTING,
                reason=(
                    "Detailed routing requires all channels to have equal width; got "
                    f"chan_width_x {chan_x.peak:g}, chan_width_y {chan_y.peak:g}, "
                    f"chan_width_io {ctx.chan_width_io:g}."
                ),
            )

        fc_values = {"Fc_output": ctx.fc_output, "Fc_input": ctx.fc_input, "Fc_pad": ctx.fc_pad}
        if ctx.fc_type is FcType.ABSOLUTE:
            bad = {name: value for name, value in fc_values.items() if value < 1}
            rule = "must be >= 1 in absolute mode"
        else:
            bad = {name: value for name, value in fc_values.items() if value > 1.0}
            rule = "must be <= 1 in fractional mode"
        if bad:
            listing = ", ".join(f"{name} = {value:g}" for name, value in bad.items())
            self._add_issue(
                ValidationIssueLevel.ERROR, ArchIssueCode.INCONSISTENT_DETAILED_ROUTING,
                reason=f"Fc values {rule}: {listing}.",
                field_name="Fc_type", fc_type=ctx.fc_type.value,
            )

    def _note_ignored_detailed_fields(self):
        for name in DETAILED_ONLY_FIELDS:
            if self.context.counters.count(name):
                self._add_issue(
                    ValidationIssueLevel.INFO, ArchIssueCode.DETAILED_FIELDS_IGNORED,
                    field_name=name, route_type=self.route_type.value,
                )
