from __future__ import annotations

import threading
from typing import Callable, List, Optional

import pytest

from fichajes.ingestion.page import RenderedPage

TABLE_HTML = """
<html>
  <body>
    <table>
      <thead>
        <tr><th>Jugador</th><th>Destino</th><th>Procedencia</th><th>Tipo</th><th>Fecha</th></tr>
      </thead>
      <tbody>
        <tr>
          <td>Pedri</td><td>FC Barcelona</td><td>UD Las Palmas</td><td>Traspaso</td><td>01/07/2024</td>
        </tr>
        <tr>
          <td><a href="https://www.laliga.com/jugador/lamine-yamal">Lamine Yamal</a></td>
          <td>FC Barcelona</td><td></td><td>Renovación</td><td>02/07/2024</td>
        </tr>
      </tbody>
    </table>
  </body>
</html>
"""

EMPTY_HTML = "<html><body><main><p>Sin datos</p></main></body></html>"


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


class FakeProvider:
    """Records every render() call and returns canned HTML."""

    def __init__(
        self,
        html: str = TABLE_HTML,
        *,
        error: Optional[BaseException] = None,
        gate: Optional[threading.Event] = None,
    ) -> None:
        self.html = html
        self.error = error
        self.gate = gate
        self.calls: List[tuple[str, str]] = []
        self._lock = threading.Lock()

    def render(self, url: str, user_agent: str) -> RenderedPage:
        with self._lock:
            self.calls.append((url, user_agent))
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return RenderedPage(url=url, html=self.html)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def page_from_html() -> Callable[[str], RenderedPage]:
    def _make(html: str) -> RenderedPage:
        return RenderedPage(url="https://www.laliga.com/fichajes/laliga-easports", html=html)

    return _make
