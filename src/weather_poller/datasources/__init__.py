"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, query building
    └── {feature}.py      # Fetch and parse functions (one per endpoint)

A data source plugs into the poller as a pair of callables::

    fetch(target: Target) -> str          # raw body, raises WeatherPollerError
    parse(raw: str) -> record             # raises ParseError

and ``polling.PollCycle(fetch=..., parse=...)`` turns them into a tick.
"""
