import pytest

from core.config import settings

from tests.helpers import make_orders, make_row


@pytest.fixture
def sample_orders():
    """Six orders across sources, dates and designs (one with a broken pickup date)."""
    return make_orders(
        make_row(name="Kim Minji", design="Heart", pickup_date="2024.01.10", source="Instagram"),
        make_row(name="Park Jisoo", design="Star", pickup_date="2024.01.05", source="Kakao", flavor="Vanilla"),
        make_row(name="Lee Hana", design="Heart", pickup_date="2024-01-03", source="Instagram", size="2호"),
        make_row(name="kim seoyeon", design="Lettering", pickup_date="invalid", source="Phone"),
        make_row(name="Choi Yuna", design="Star", pickup_date="2024.01.04", source="Kakao", cream=""),
        make_row(name="Jung Ara", design="Heart", pickup_date="2024.01.03", source="Instagram"),
    )


@pytest.fixture
def operator(monkeypatch):
    monkeypatch.setattr(settings, "operator_email", "ofyou")
    monkeypatch.setattr(settings, "operator_password", "s3cret!")
    monkeypatch.setattr(settings, "default_api_key", None)
    monkeypatch.setattr(settings, "default_sheet_id", None)
    return settings
