"""
Transaction signers for the Algorand protocol.

Key components:
- signer.py: base signer interface
- ed25519.py: single-key signing and arbitrary data signing
- multisig.py: multisig accounts and threshold signature aggregation
- logicsig.py: program-based authorization
"""

from .signer import Signer, SignerError
from .ed25519 import Ed25519Signer, sign_transaction, sign_bytes, verify_bytes
from .multisig import (
    MultisigMetadata, MultisigMetadataError, MultisigSignature, MultisigSignatureSet,
    MultisigState, MultisigSubsig, SlotStatus,
    finalize_multisig_transaction, merge_multisig_transactions, sign_multisig_transaction,
)
from .logicsig import (
    LogicSig, build_delegated_multi, build_delegated_single, build_undelegated,
    program_address, program_signing_bytes, sign_logicsig_transaction,
)

__all__ = [
    "Signer",
    "SignerError",
    "Ed25519Signer",
    "sign_transaction",
    "sign_bytes",
    "verify_bytes",
    "MultisigMetadata",
    "MultisigMetadataError",
    "MultisigSignature",
    "MultisigSignatureSet",
    "MultisigState",
    "MultisigSubsig",
    "SlotStatus",
    "sign_multisig_transaction",
    "merge_multisig_transactions",
    "finalize_multisig_transaction",
    "LogicSig",
    "program_address",
    "program_signing_bytes",
    "build_undelegated",
    "build_delegated_single",
    "build_delegated_multi",
    "sign_logicsig_transaction",
]
