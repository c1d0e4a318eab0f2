"""Endpoint templates and their resolution to path fragments.

An endpoint is a logical key (usually an ``enum.IntEnum`` member defined by
the API specific SDK) mapped to a template string with ``%v`` placeholders.
A :class:`Resource` pairs a key with the positional qualifiers to substitute.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .errors import EndpointNotFoundError, QualifierCountError

PLACEHOLDER = "%v"


class Endpointer(Protocol):
    """Anything that can resolve itself to an endpoint path fragment."""

    def get_endpoint(self) -> str: ...


@dataclass(frozen=True)
class Resource:
    """An endpoint key with its qualifiers and the template table to use.

    Qualifiers are inserted with ``str()`` (booleans as ``true``/``false``)
    and are not escaped, so callers must supply URL safe values.
    """

    endpoint: int
    qualifiers: Sequence[Any] = ()
    endpoints: Mapping[int, str] = field(default_factory=dict)

    def get_endpoint(self) -> str:
        """Resolve the endpoint template with the qualifiers.

        Returns:
            The path fragment, e.g. ``"resource/5"`` for the template
            ``"resource/%v"`` and qualifiers ``[5]``.

        Raises:
            EndpointNotFoundError: If no template exists for the key.
            QualifierCountError: If the number of qualifiers differs from
                the number of placeholders in the template.
        """
        try:
            template = self.endpoints[self.endpoint]
        except KeyError:
            msg = f"No endpoint template registered for {self.endpoint!r}"
            raise EndpointNotFoundError(msg) from None

        expected = template.count(PLACEHOLDER)
        if expected != len(self.qualifiers):
            msg = (
                "Amount of qualifiers did not match expected. "
                f"Got {len(self.qualifiers)}, expected {expected}"
            )
            raise QualifierCountError(msg)

        if expected == 0:
            return template

        parts = template.split(PLACEHOLDER)
        out = [parts[0]]
        for qualifier, rest in zip(self.qualifiers, parts[1:], strict=True):
            out.append(_format_qualifier(qualifier))
            out.append(rest)
        return "".join(out)


def _format_qualifier(qualifier: Any) -> str:
    # Booleans render lowercase, as the service expects "true"/"false".
    if isinstance(qualifier, bool):
        return "true" if qualifier else "false"
    return str(qualifier)
