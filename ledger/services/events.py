from typing import List

from ledger.models import LedgerEvent


def _jsonable(value):
    # Amounts overflow JSON number precision in most consumers
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def emit_event(source: str, name: str, block_time: int, **payload) -> LedgerEvent:
    """Append an event; call inside the emitting operation's transaction."""
    return LedgerEvent.objects.create(
        source=source,
        name=name,
        block_time=block_time,
        payload={key: _jsonable(value) for key, value in payload.items()},
    )


def events_named(name: str) -> List[LedgerEvent]:
    return list(LedgerEvent.objects.filter(name=name).order_by('id'))
