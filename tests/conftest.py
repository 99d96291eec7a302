"""
Pytest configuration and shared fixtures.
"""
import os
import sys
import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


CHILEAN_HEADER = ["Fecha", "Descripción", "Canal o sucursal", "Cargos (CLP)", "Abono (CLP)", "Saldo (CLP)"]

CHILEAN_ROWS = [
    ["15/09/2025", "Traspaso A:Mascoteros Spa", "Internet", "$ 90.000", "", "$ 5.339.195"],
    ["15/09/2025", "Pago:proveedores 0969361000", "Oficina Central", "", "$ 15.000", "$ 5.429.195"],
    ["15/09/2025", "Traspaso A Cuenta:001770480108", "Internet", "$ 4.000", "", "$ 5.414.195"],
    ["12/09/2025", "Traspaso De:Maria Daniela Valenzuela Schindler", "Internet", "", "$ 210.000", "$ 5.418.195"],
    ["10/09/2025", "Pago Automat. Dividendo Hipotecario", "Oficina Central", "$ 740.328", "", "$ 5.208.195"],
    ["09/09/2025", "Traspaso A:Alejandro Schmauk", "Internet", "$ 45.000", "", "$ 5.948.523"],
    ["08/09/2025", "Traspaso A:Maria Paz Infante Bascunan", "Internet", "$ 45.000", "", "$ 5.993.523"],
    ["08/09/2025", "Traspaso A:Fintual Agf Sa", "Internet", "$ 3.200.000", "", "$ 6.038.523"],
    ["08/09/2025", "Traspaso A Cuenta:001770480108", "Internet", "$ 5.000.000", "", "$ 9.238.523"],
    ["08/09/2025", "Traspaso A:Fintual Agf Sa", "Internet", "$ 5.000.000", "", "$ 14.238.523"],
]


@pytest.fixture
def chilean_rows():
    """Bank statement rows (no header) written in the Chilean number format."""
    return [list(r) for r in CHILEAN_ROWS]


@pytest.fixture
def chilean_grid():
    """Bank statement grid with its header row."""
    return [list(CHILEAN_HEADER)] + [list(r) for r in CHILEAN_ROWS]


@pytest.fixture
def fertility_2023_grid():
    return [
        ["Rank", "Country", "Total fertility rate in 2023 (births/woman)"],
        ["1", "Somalia", "6.13"],
        ["2", "Chad", "6.12"],
        ["3", "Niger", "6.06"],
        ["4", "DR Congo", "6.05"],
        ["5", "Central African Republic", "6.01"],
    ]


@pytest.fixture
def fertility_2025_grid():
    return [
        ["Rank", "Country", "Total fertility rate in 2025 (births/woman)"],
        ["1", "Chad", "5.94"],
        ["2", "Somalia", "5.91"],
        ["3", "DR Congo", "5.90"],
        ["4", "Central African Republic", "5.81"],
        ["5", "Niger", "5.79"],
    ]


@pytest.fixture
def nested_statement_html():
    """A layout table (role=presentation) wrapping the real statement table."""
    return """
    <html><body>
    <table name="GroupContainer" class="displayPageTable" role="presentation">
      <tbody>
        <tr role="presentation"><td role="presentation" colspan="2"></td></tr>
        <tr role="presentation"><td role="presentation" colspan="2">
          <table id="movements">
            <thead>
              <tr><th>Fecha</th><th>Descripción</th><th>Cargos</th><th>Saldo</th></tr>
            </thead>
            <tbody>
              <tr><td>15/09/2025</td><td>Traspaso A:Mascoteros Spa</td><td>$ 90.000</td><td>$ 5.339.195</td></tr>
              <tr><td>15/09/2025</td><td>Traspaso A Cuenta</td><td>$ 4.000</td><td>$ 5.414.195</td></tr>
              <tr><td>10/09/2025</td><td>Pago Automat.<br>Dividendo</td><td>$ 740.328</td><td>$ 5.208.195</td></tr>
            </tbody>
          </table>
        </td></tr>
      </tbody>
    </table>
    </body></html>
    """


@pytest.fixture
def sample_date_strings():
    """Sample date strings in various formats for testing."""
    return {
        "dmy_slash": "15/09/2025",
        "dmy_dash_short": "08-09-25",
        "mdy_fallback": "12/31/2023",
        "iso_date": "2023-01-15",
        "ymd_dot": "2023.01.15",
        "month_name": "Jan 15, 2023",
        "day_month_name": "12 Sep 2025",
        "dash_abbrev": "12-Sep-2025",
        "spanish_long": "12 de septiembre de 2025",
        "invalid": "not_a_date",
        "invalid_partial": "45/13/2023",
        "plain_number": "20230115",
    }


@pytest.fixture
def clean_settings(monkeypatch):
    """Isolate tests from TABLELENS_* variables in the caller's environment."""
    from tablelens.config import reset_settings

    for key in list(os.environ):
        if key.upper().startswith("TABLELENS_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()
