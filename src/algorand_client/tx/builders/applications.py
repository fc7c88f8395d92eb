"""
Application call transaction builder.
"""

from __future__ import annotations
from typing import Iterable, Union

from ...runtime.address import AddressLike, to_address
from ..payloads import ApplicationCallFields, BoxReference, StateSchema
from ..types import OnComplete, TransactionType
from .base import BaseTxBuilder


class ApplicationCallBuilder(BaseTxBuilder[ApplicationCallFields]):
    """Builder for application create, call, update and delete."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.APPLICATION_CALL

    @property
    def payload_cls(self):
        return ApplicationCallFields

    def app_id(self, app_id: int) -> ApplicationCallBuilder:
        """Set the called application (0 creates one)."""
        return self.with_field("app_id", app_id)

    def on_complete(self, action: Union[OnComplete, int]) -> ApplicationCallBuilder:
        return self.with_field("on_complete", OnComplete.from_wire(int(action)))

    def approval_program(self, program: bytes) -> ApplicationCallBuilder:
        return self.with_field("approval_program", program)

    def clear_program(self, program: bytes) -> ApplicationCallBuilder:
        return self.with_field("clear_program", program)

    def global_schema(self, num_uints: int, num_byte_slices: int) -> ApplicationCallBuilder:
        return self.with_field("global_schema", StateSchema(num_uints=num_uints, num_byte_slices=num_byte_slices))

    def local_schema(self, num_uints: int, num_byte_slices: int) -> ApplicationCallBuilder:
        return self.with_field("local_schema", StateSchema(num_uints=num_uints, num_byte_slices=num_byte_slices))

    def extra_pages(self, pages: int) -> ApplicationCallBuilder:
        return self.with_field("extra_pages", pages)

    def args(self, args: Iterable[bytes]) -> ApplicationCallBuilder:
        """Replace the application arguments."""
        return self.with_field("app_args", tuple(args))

    def add_arg(self, arg: bytes) -> ApplicationCallBuilder:
        return self.with_field("app_args", tuple(self.get_field("app_args", ())) + (arg,))

    def accounts(self, accounts: Iterable[AddressLike]) -> ApplicationCallBuilder:
        return self.with_field("accounts", tuple(to_address(a) for a in accounts))

    def foreign_apps(self, app_ids: Iterable[int]) -> ApplicationCallBuilder:
        return self.with_field("foreign_apps", tuple(app_ids))

    def foreign_assets(self, asset_ids: Iterable[int]) -> ApplicationCallBuilder:
        return self.with_field("foreign_assets", tuple(asset_ids))

    def box(self, name: bytes, app_index: int = 0) -> ApplicationCallBuilder:
        """Add a box reference (app_index 0 means the called app)."""
        boxes = tuple(self.get_field("boxes", ()))
        return self.with_field("boxes", boxes + (BoxReference(app_index=app_index, name=name),))


__all__ = ["ApplicationCallBuilder"]
