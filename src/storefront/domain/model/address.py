"""Address aggregate and the snapshot orders keep of it."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from storefront.domain.exceptions import ValidationError

_REQUIRED_FIELDS = ("recipient", "street", "city", "state", "postal_code", "phone")


@dataclass(frozen=True)
class AddressSnapshot:
    """Copy of an address taken when an order is placed.

    Orders hold this value, never a reference to the registry entry, so a
    later edit or delete of the address cannot change a placed order.
    """

    recipient: str
    street: str
    city: str
    state: str
    postal_code: str
    phone: str
    country: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Address:
    id: str
    buyer_id: str
    recipient: str
    street: str
    city: str
    state: str
    postal_code: str
    phone: str
    country: str | None = None

    @staticmethod
    def create(id: str, buyer_id: str, **fields: str | None) -> Address:
        """Create a new address, rejecting blank required fields."""
        cleaned: dict[str, str | None] = {}
        for name in _REQUIRED_FIELDS:
            value = fields.get(name)
            if value is None or not str(value).strip():
                raise ValidationError(f"Address field '{name}' is required")
            cleaned[name] = str(value).strip()
        country = fields.get("country")
        cleaned["country"] = country.strip() if country and country.strip() else None
        return Address(id=id, buyer_id=buyer_id, **cleaned)  # type: ignore[arg-type]

    def belongs_to(self, buyer_id: str) -> bool:
        return self.buyer_id == buyer_id

    def snapshot(self) -> AddressSnapshot:
        return AddressSnapshot(
            recipient=self.recipient,
            street=self.street,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            phone=self.phone,
            country=self.country,
        )
