"""
Real HTTP integration clients.

- base.py: generic request/response machinery shared by every resource endpoint
- families.py: the families endpoint service
- transport.py: httpx-backed transport talking to the PIM REST API

Important:
- Endpoint services depend only on the ApiTransport interface, so the same
  services run against the mock transport in clients/mocks/.
"""
