# xlive

Building blocks for managing live-streaming sessions. Everything here uses only
the standard library.

- **`xlive.session_store`**: `SessionRepository` keeps session records in a
  SQLite database. It works in memory by default, or from a file path. Queries
  that must find one row raise `NoRowsError` when they find none. The parameter
  dataclasses are `CreateSessionParams`, `EndSessionParams`,
  `UpdateSessionAggregatesParams`, `ListSessionsParams` and
  `GetSessionsCountParams`. Rows come back as `SessionRecord`.
- **`xlive.kvstore`**: `KeyValueStore` is a thread-safe, in-process key/value
  store with an optional time-to-live on each key.
- **`xlive.messaging`**: `MessageBus` is an in-process publish/subscribe bus.
  Subjects are dot-separated and subscriptions may use `*` and `>` wildcards.
  The bus keeps a log of every `Message` it publishes.
- **`xlive.netutil`**: `get_outbound_ip()` returns the local address that the
  host prefers for outbound traffic.
- **`xlive.response`**: `success()` and `fail()` build `UnifiedResponse`
  envelopes for HTTP APIs. `ApiError` describes an error in more detail.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Sessions

```python
from datetime import datetime, timezone
from xlive.session_store import (
    SessionRepository, CreateSessionParams, EndSessionParams,
    ListSessionsParams, NoRowsError,
)

with SessionRepository() as repo:          # ":memory:" unless a path is given
    repo.create_session(CreateSessionParams(
        session_id="s1", room_id="r1", owner_user_id="u1",
        start_time=datetime.now(timezone.utc), status="live",
    ))
    repo.get_live_session_id_by_room_id("r1")      # "s1"
    repo.end_session(EndSessionParams("s1", datetime.now(timezone.utc)))
    repo.list_sessions(ListSessionsParams(limit=10, offset=0, status="ended"))
    try:
        repo.get_live_session_by_room_id("r1")
    except NoRowsError:
        pass                                       # no live session any more
```

`end_session` only ends a session whose status is `live`. `delete_session`
does nothing when the session does not exist. `list_sessions` returns the
newest sessions first. An empty filter string matches every session.

### Cache

```python
from xlive.kvstore import KeyValueStore

store = KeyValueStore()
store.set("cache:session:s1", b"...", ttl=3600)   # seconds or a timedelta
store.get("cache:session:s1")                     # b"..."
store.ttl("cache:session:s1")                     # seconds left
store.delete("cache:session:s1")                  # 1
```

A `ttl` of `None` or zero means the key never expires.

### Messages

```python
from xlive.messaging import MessageBus

bus = MessageBus()
sub = bus.subscribe("platform.event.>", lambda msg: print(msg.subject, msg.data))
bus.publish("platform.event.session.updated", b"{}", {"traceparent": "00-..."})
bus.messages("platform.event.*.updated")          # matching published messages
sub.unsubscribe()
bus.close()                                       # later publish raises ConnectionError
```

### Responses

```python
from xlive.response import success, fail

success({"session_id": "abc"}, "done").to_dict()
# {'success': True, 'code': 0, 'message': 'done', 'data': {'session_id': 'abc'}}

fail(404, "not found").to_dict()
# {'success': False, 'code': 404, 'message': 'not found', 'data': None}
```

`fail` records its first extra argument as `details` only when that argument is
neither `None` nor an empty list.

## What this package does not do

The package provides the storage, cache, messaging and response pieces and
stops there. It has no layer that combines them into session business logic.
For example, nothing here opens a session when a stream goes live, keeps the
cache in step with the database, or publishes session events. The package
also has no network server, no gRPC or HTTP request handling and no
command-line program. The message bus and the cache run inside one process
only and do not connect to any external broker or cache server.