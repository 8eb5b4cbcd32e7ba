"""
Shared pytest fixtures for bracket builder tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - skip the exhaustive roster-size sweep
"""
import pytest
import sys
import os
import yaml

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket.models import Competitor


def make_roster(count, start=1):
    """Competitors with seeds start..start+count-1, listed in seed order."""
    return [
        Competitor(id=f"c{seed}", name=f"Player {seed}", seed=seed)
        for seed in range(start, start + count)
    ]


@pytest.fixture
def roster_factory():
    return make_roster


@pytest.fixture
def eight_players():
    return make_roster(8)


@pytest.fixture
def twenty_five_players():
    return make_roster(25)


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch):
    """Point the Flask app at an empty data directory."""
    import app as app_module

    data_dir = tmp_path / "data"
    data_dir.mkdir()
    settings_file = data_dir / "settings.yaml"

    monkeypatch.setattr(app_module, 'DATA_DIR', str(data_dir))
    monkeypatch.setattr(app_module, 'SETTINGS_FILE', str(settings_file))
    return str(data_dir)


@pytest.fixture
def client(temp_data_dir):
    """Create a test client bound to a temporary data directory."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def roster_file(tmp_path):
    """Write a small roster YAML and return its path."""
    path = tmp_path / "roster.yaml"
    path.write_text(yaml.dump({'competitors': [
        {'id': 'a', 'name': 'Alice', 'seed': 1},
        {'id': 'b', 'name': 'Bao', 'seed': 2},
        {'id': 'c', 'name': 'Chi', 'seed': 3},
        {'id': 'd', 'name': 'Dung', 'seed': 3},
        {'id': 'e', 'name': 'Emil', 'seed': 4},
        {'id': 'f', 'name': 'Fay'},
    ]}, default_flow_style=False))
    return str(path)
