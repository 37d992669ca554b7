import httpx
import pytest

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import Outcome
from core.errors import TransportError, UnexpectedStatusError
from core.interfaces.confirmer import Confirmer
from core.services.conflicts import check_destination

URL = "http://h/dashboards/reports/sales"


class ScriptedConfirmer:
    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.questions: list[str] = []

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer


@pytest.fixture
def client(server):
    with build_client(AppSettings(), transport=server.transport) as c:
        yield c


def test_scripted_confirmer_satisfies_protocol():
    assert isinstance(ScriptedConfirmer(True), Confirmer)


def test_overwrite_skips_existence_check(server, client):
    confirmer = ScriptedConfirmer(False)
    decision = check_destination(client, URL, token=None, overwrite=True, confirmer=confirmer)
    assert decision.outcome is Outcome.PROCEED
    assert server.calls() == []
    assert confirmer.questions == []


def test_not_found_proceeds_without_prompt(server, client):
    server.route("GET", "/dashboards/reports/sales", 404)
    confirmer = ScriptedConfirmer(False)
    decision = check_destination(client, URL, token="t", overwrite=False, confirmer=confirmer)
    assert decision.outcome is Outcome.PROCEED
    assert confirmer.questions == []
    assert server.calls("GET")[0].headers["authorization"] == "token t"


@pytest.mark.parametrize("answer, outcome", [(True, Outcome.PROCEED), (False, Outcome.ABORT_CONFLICT)])
def test_existing_dashboard_asks_operator(server, client, answer, outcome):
    server.route("GET", "/dashboards/reports/sales", 200)
    confirmer = ScriptedConfirmer(answer)
    decision = check_destination(client, URL, token=None, overwrite=False, confirmer=confirmer)
    assert decision.outcome is outcome
    assert len(confirmer.questions) == 1
    assert URL in confirmer.questions[0]


def test_transport_failure_aborts(server, client):
    server.route("GET", "/dashboards/reports/sales", httpx.ConnectTimeout("timed out"))
    decision = check_destination(
        client, URL, token=None, overwrite=False, confirmer=ScriptedConfirmer(True)
    )
    assert decision.outcome is Outcome.ABORT_ERROR
    assert isinstance(decision.error, TransportError)


def test_error_status_aborts(server, client):
    server.route(
        "GET",
        "/dashboards/reports/sales",
        httpx.Response(401, json={"message": "Bad token"}),
    )
    confirmer = ScriptedConfirmer(True)
    decision = check_destination(client, URL, token="x", overwrite=False, confirmer=confirmer)
    assert decision.outcome is Outcome.ABORT_ERROR
    assert isinstance(decision.error, UnexpectedStatusError)
    assert decision.error.reason == "Bad token"
    assert confirmer.questions == []
