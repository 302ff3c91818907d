import attrs

from src.platform.exception.exceptions import DomainError


def _required(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise DomainError(f'Delivery {attribute.name} is required')


@attrs.define(frozen=True)
class DeliveryAddress:
    address: str = attrs.field(validator=_required)
    city: str = attrs.field(validator=_required)
    state: str = attrs.field(validator=_required)
    pincode: str = attrs.field(validator=_required)
    phone: str = attrs.field(validator=_required)

    def to_dict(self) -> dict[str, str]:
        return attrs.asdict(self)
