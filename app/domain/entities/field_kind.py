from enum import Enum


class FieldKind(str, Enum):
    QUANTITY = "quantity"
    NAME = "name"
    PHONE = "phone"
    ADDRESS = "address"
