from typing import Dict, Iterator, Optional, Union

from star.errors import WarningHandler, report_warning, semantic_error
from star.types import DEFAULT_LIMITS, Limits, Variable, VarKind, zero_value


class SymbolTable:
    """Flat, append-only registry of the variables of one run.

    Names are unique; there is no scoping and no shadowing. Variables live
    until the run ends.
    """
    def __init__(self, limits: Optional[Limits] = None, warn: Optional[WarningHandler] = None):
        self.limits = limits or DEFAULT_LIMITS
        self.warn = warn or report_warning
        self.variables: Dict[str, Variable] = {}

    def __len__(self) -> int:
        return len(self.variables)

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __iter__(self) -> Iterator[Variable]:
        return iter(self.variables.values())

    def declare(self, name: str, kind: VarKind) -> Variable:
        if name in self.variables:
            raise semantic_error(f'variable {name} already declared')
        if len(self.variables) >= self.limits.max_variables:
            raise semantic_error(f'too many variables declared (limit {self.limits.max_variables})')
        var = Variable(name, kind, zero_value(kind))
        self.variables[name] = var
        return var

    def lookup(self, name: str) -> Optional[Variable]:
        return self.variables.get(name)

    def get(self, name: str) -> Variable:
        var = self.variables.get(name)
        if var is None:
            raise semantic_error(f'variable {name} not declared')
        return var

    def assign(self, name: str, value: Union[int, str]) -> Variable:
        """Store `value` into `name`, honoring the variable's kind.

        Integer variables accept ints (negatives are clamped to zero with a
        warning) or the decimal rendering of one. Text variables store the
        rendered value, truncated to the string cap. Negative ints are
        clamped for both kinds.
        """
        var = self.get(name)
        if var.kind is VarKind.INTEGER and isinstance(value, str):
            try:
                value = int(value)
            except ValueError:
                raise semantic_error(f'cannot assign text to integer variable {name}')
        if isinstance(value, int) and value < 0:
            self.warn(f'negative value {value} forced to zero for variable {name}')
            value = 0
        if var.kind is VarKind.INTEGER:
            var.value = value
        else:
            var.value = self.clip_text(str(value))
        return var

    def clip_text(self, text: str) -> str:
        return text[:self.limits.max_string_length - 1]
