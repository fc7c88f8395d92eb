"""
Key registration transaction builder.
"""

from __future__ import annotations
from typing import Optional

from ..payloads import KeyRegistrationFields
from ..types import TransactionType
from .base import BaseTxBuilder


class KeyRegistrationBuilder(BaseTxBuilder[KeyRegistrationFields]):
    """Builder for key registration transactions (online, offline, non-participating)."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.KEY_REGISTRATION

    @property
    def payload_cls(self):
        return KeyRegistrationFields

    def online(self, vote_pk: bytes, selection_pk: bytes, vote_first: int, vote_last: int,
               vote_key_dilution: int, state_proof_pk: Optional[bytes] = None) -> KeyRegistrationBuilder:
        """Register participation keys."""
        return self._copy(fields={
            "vote_pk": vote_pk,
            "selection_pk": selection_pk,
            "state_proof_pk": state_proof_pk,
            "vote_first": vote_first,
            "vote_last": vote_last,
            "vote_key_dilution": vote_key_dilution,
            "non_participation": False,
        })

    def offline(self) -> KeyRegistrationBuilder:
        """Take the account offline (no keys)."""
        return self.__class__(header=self._header, params=self._params)

    def non_participating(self) -> KeyRegistrationBuilder:
        """Mark the account as permanently non-participating."""
        return self.offline().with_field("non_participation", True)


__all__ = ["KeyRegistrationBuilder"]
