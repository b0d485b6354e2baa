"""
Mock integration clients.

These transports return fake (but realistic) responses without calling any external API.
They are used when:
- no PIM instance is reachable
- we want to test endpoint services end-to-end without external dependencies

Important:
- Mock transports implement the SAME ApiTransport interface as the real HTTP transport.
- Responses are shaped like the remote API's (status codes, `_embedded` envelopes, NDJSON lines).

Switching to real:
Set use_mock to false (PIM_USE_MOCK) and PimClient.from_config builds an HttpxTransport instead.
"""
