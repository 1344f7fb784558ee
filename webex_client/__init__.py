"""WebEx XML API client: one envelope, one POST, one decoded response.

WHY: The legacy WebEx XML API speaks hand-assembled XML envelopes posted as
form fields. Callers (scripts, the CLI, tests) should not have to know the
envelope layout, the two ways of getting it onto the wire, or the namespaced
response shape.

HOW: Three-stage pipeline per call: build the envelope (api.envelope),
send it through a pluggable transport (api.transport), decode the response
into typed dataclasses (api.decoder / api.models). WebexClient wires the
stages together and keeps a per-instance call history.

RULES:
- All network calls go through WebexClient
- Every failure surfaces as a WebexError subclass carrying an ErrorKind
- Nothing is process-global: credentials and history live on the client
"""

__version__ = "0.1.0"
