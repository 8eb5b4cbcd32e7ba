"""
YAML-backed storage for seed draw sessions.
"""
import logging
import os
import tempfile
import uuid
from datetime import datetime
from typing import Dict, Iterable, List, Optional

import yaml
from filelock import FileLock

from .errors import DrawError, DrawNotFoundError, DrawStoreError
from .models import Competitor

logger = logging.getLogger(__name__)

DRAW_TYPES = ('automatic', 'manual')


class DrawStore:
    """Draw sessions kept in a single draws.yaml, guarded by a file lock."""

    def __init__(self, data_dir: str, lock_timeout: int = 10):
        self.data_dir = data_dir
        os.makedirs(data_dir, exist_ok=True)
        self.file_path = os.path.join(data_dir, 'draws.yaml')
        self._lock = FileLock(os.path.join(data_dir, '.draws.lock'), timeout=lock_timeout)

    def _read(self, strict: bool = False) -> List[Dict]:
        """
        Load all sessions.

        A file that cannot be parsed reads as empty, unless `strict` is set:
        write paths pass strict=True so a corrupt store is never replaced.
        """
        if not os.path.exists(self.file_path):
            return []
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            problem = f'Failed to parse {self.file_path}: {e}'
        else:
            if data is None:
                return []
            draws = data.get('draws') if isinstance(data, dict) else None
            if isinstance(draws, list):
                return draws
            if isinstance(data, dict) and draws is None:
                return []
            problem = f'Unexpected layout in {self.file_path}: expected a mapping with a draws list'
        if strict:
            raise DrawStoreError(problem)
        logger.warning(problem)
        return []

    def _write(self, draws: List[Dict]):
        with tempfile.NamedTemporaryFile('w', delete=False, dir=self.data_dir, encoding='utf-8',
                                         suffix='.tmp') as f:
            tmp_path = f.name
            yaml.dump({'draws': draws}, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        os.replace(tmp_path, self.file_path)

    def save_draw(self, title: str, draw_type: str, competitors: Iterable[Competitor],
                  notes: Optional[str] = None) -> Dict:
        """Store a new draw session and return it."""
        if draw_type not in DRAW_TYPES:
            raise DrawError(f"Draw type must be one of {', '.join(DRAW_TYPES)}, got {draw_type!r}")
        session = {
            'id': uuid.uuid4().hex,
            'title': title or 'Untitled draw',
            'draw_type': draw_type,
            'drawn_at': datetime.now().isoformat(),
            'notes': notes,
            'is_final': False,
            'results': [
                {
                    'competitor_id': competitor.id,
                    'name': competitor.name,
                    'club': competitor.club,
                    'seed': competitor.seed,
                }
                for competitor in competitors
            ],
        }
        with self._lock:
            draws = self._read(strict=True)
            draws.append(session)
            self._write(draws)
        logger.info(f"Saved {draw_type} draw {session['id']} with {len(session['results'])} competitors")
        return session

    def list_draws(self) -> List[Dict]:
        return self._read()

    def load_draw(self, draw_id: str) -> Dict:
        for session in self._read():
            if session.get('id') == draw_id:
                return session
        raise DrawNotFoundError(draw_id)

    def finalize_draw(self, draw_id: str) -> Dict:
        """Mark a draw as final; finalized draws can no longer be deleted."""
        with self._lock:
            draws = self._read(strict=True)
            for session in draws:
                if session.get('id') == draw_id:
                    session['is_final'] = True
                    self._write(draws)
                    return session
        raise DrawNotFoundError(draw_id)

    def delete_draw(self, draw_id: str):
        with self._lock:
            draws = self._read(strict=True)
            for index, session in enumerate(draws):
                if session.get('id') != draw_id:
                    continue
                if session.get('is_final'):
                    raise DrawError(f"Draw {draw_id} is final and cannot be deleted")
                del draws[index]
                self._write(draws)
                return
        raise DrawNotFoundError(draw_id)

    def roster_for_draw(self, draw_id: str) -> List[Competitor]:
        session = self.load_draw(draw_id)
        return [
            Competitor(
                id=str(entry['competitor_id']),
                name=entry.get('name') or str(entry['competitor_id']),
                seed=entry.get('seed'),
                club=entry.get('club'),
            )
            for entry in session.get('results', [])
        ]
