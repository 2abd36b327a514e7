import pytest

from cep_core import CepRecord


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self._payload = payload
        self.status_code = status_code
        self._bad_json = bad_json

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


class FakeHttp:
    """Substitui requests.Session; guarda as URLs pedidas."""

    def __init__(self, responses=None, exc=None):
        self.responses = responses or {}
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        for cep, resp in self.responses.items():
            if f"/{cep}/json/" in url:
                return resp
        return FakeResponse({"erro": True})


VIACEP = {
    "01001000": FakeResponse({
        "cep": "01001-000",
        "logradouro": "Praça da Sé",
        "bairro": "Sé",
        "localidade": "São Paulo",
        "uf": "SP",
    }),
    "05000000": FakeResponse({"cep": "05000-000", "logradouro": "Rua A", "localidade": "São Paulo"}),
    "69900970": FakeResponse({"cep": "69900-970", "logradouro": "", "localidade": "Rio Branco"}),
}


@pytest.fixture
def http():
    return FakeHttp(dict(VIACEP))


@pytest.fixture
def se():
    return CepRecord("01001-000", "Praça da Sé", "São Paulo")


@pytest.fixture
def records():
    return [
        CepRecord("05000-000", "Rua A", "São Paulo"),
        CepRecord("01000-000", "Rua B", "São Paulo"),
        CepRecord("20040-002", "Av. Rio Branco", "Rio de Janeiro"),
    ]


@pytest.fixture
def fake_http():
    return FakeHttp


@pytest.fixture
def fake_response():
    return FakeResponse
