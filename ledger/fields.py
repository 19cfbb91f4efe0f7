from django.core import exceptions
from django.db import models


class TokenAmountField(models.CharField):
    """
    Non-negative integer amount of arbitrary size, stored as a decimal string.

    Token amounts use 18 decimals and routinely exceed 64 bits, which neither
    BigIntegerField nor SQLite's NUMERIC affinity can hold exactly.
    """
    description = "Arbitrary precision token amount"

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('max_length', 80)
        kwargs.setdefault('default', 0)
        super().__init__(*args, **kwargs)

    def deconstruct(self):
        name, path, args, kwargs = super().deconstruct()
        if kwargs.get('max_length') == 80:
            del kwargs['max_length']
        if kwargs.get('default') == 0:
            del kwargs['default']
        return name, path, args, kwargs

    def from_db_value(self, value, expression, connection):
        if value is None:
            return None
        return int(value)

    def to_python(self, value):
        if value is None or isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            raise exceptions.ValidationError(
                "'%(value)s' is not a valid token amount",
                code='invalid',
                params={'value': value},
            )

    def get_prep_value(self, value):
        if value is None:
            return None
        value = self.to_python(value)
        if value < 0:
            raise ValueError(f"Token amounts cannot be negative: {value}")
        return str(value)
