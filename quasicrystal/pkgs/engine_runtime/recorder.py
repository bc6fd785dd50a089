"""
Site and bond recording with CSV, JSONL and Parquet output.

SiteRecorder flattens any lattice-like structure (QuasicrystalData or Lattice)
into per-site and per-bond rows for downstream tools.
"""
import csv
import json
import os
import logging
from typing import Any, Dict, List
from datetime import datetime, timezone

import numpy as np

from ..core_lattice.interface import AbstractLattice

logger = logging.getLogger(__name__)

AXES = ("x", "y", "z")


def _bonds_path(path: str) -> str:
    stem, ext = os.path.splitext(path)
    return f"{stem}_bonds{ext}"


class SiteRecorder:
    """Recorder for site positions and bond lists."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.site_rows: List[Dict] = []
        self.bond_rows: List[Dict] = []
        self.dimension = 0
        self._metadata = {
            'created_at': datetime.now(timezone.utc).isoformat(),
        }

    def set_metadata(self, **kwargs):
        """Set metadata that will be included in recordings."""
        self._metadata.update(kwargs)

    def record(self, lattice: AbstractLattice):
        """Replace recorded rows with the sites and bonds of lattice."""
        if not self.enabled:
            return
        self.clear()
        self.dimension = lattice.positions.shape[1]
        for i, (pos, nn) in enumerate(zip(lattice.positions, lattice.nearest_neighbors)):
            row: Dict[str, Any] = {'site': i}
            row.update({axis: float(p) for axis, p in zip(AXES, pos)})
            row['coordination'] = len(nn)
            self.site_rows.append(row)
        for b in lattice.bonds:
            row = {'src': b.src, 'dst': b.dst, 'type': b.type}
            row.update({f"d{axis}": float(v) for axis, v in zip(AXES, b.vector)})
            row['length'] = float(np.linalg.norm(b.vector))
            self.bond_rows.append(row)

    @property
    def site_fields(self) -> List[str]:
        return ["site", *AXES[:self.dimension], "coordination"]

    @property
    def bond_fields(self) -> List[str]:
        return ["src", "dst", "type", *(f"d{axis}" for axis in AXES[:self.dimension]), "length"]

    @staticmethod
    def _write_csv(path: str, rows: List[Dict], fields: List[str]):
        # header only when rows is empty, overwriting any earlier export
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fields)
            writer.writeheader()
            writer.writerows(rows)
        logger.info(f"Saved {len(rows)} rows to CSV: {path}")

    def dump_csv(self, path: str):
        """Sites to path, bonds to <path stem>_bonds.csv. Both files are always written."""
        if not self.enabled:
            return
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        self._write_csv(path, self.site_rows, self.site_fields)
        self._write_csv(_bonds_path(path), self.bond_rows, self.bond_fields)

    def dump_jsonl(self, path: str):
        """Metadata line, then one line per site and per bond tagged with 'kind'."""
        if not self.enabled:
            return
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        with open(path, 'w') as f:
            f.write(json.dumps({'_metadata': self._metadata}, default=str) + '\n')
            for row in self.site_rows:
                f.write(json.dumps({'kind': 'site', **row}) + '\n')
            for row in self.bond_rows:
                f.write(json.dumps({'kind': 'bond', **row}) + '\n')

        logger.info(f"Saved {len(self.site_rows)} sites and {len(self.bond_rows)} bonds "
                    f"to JSONL: {path}")

    def dump_parquet(self, path: str):
        """Sites to path, bonds to <path stem>_bonds.parquet. Both files are always written."""
        if not self.enabled:
            return

        try:
            import pandas as pd
            import pyarrow as pa
            import pyarrow.parquet as pq
        except ImportError:
            logger.warning("pandas/pyarrow not available, skipping Parquet export")
            return

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        metadata = {'metadata': json.dumps(self._metadata, default=str)}
        targets = ((path, self.site_rows, self.site_fields),
                   (_bonds_path(path), self.bond_rows, self.bond_fields))
        for target, rows, fields in targets:
            table = pa.Table.from_pandas(pd.DataFrame(rows, columns=fields), preserve_index=False)
            table = table.replace_schema_metadata(metadata)
            pq.write_table(table, target)
            logger.info(f"Saved {len(rows)} rows to Parquet: {target}")

    def clear(self):
        self.site_rows.clear()
        self.bond_rows.clear()

    def get_summary(self) -> Dict[str, Any]:
        """Row counts and bond length statistics."""
        summary: Dict[str, Any] = {
            'site_count': len(self.site_rows),
            'bond_count': len(self.bond_rows),
        }
        if self.bond_rows:
            lengths = np.array([row['length'] for row in self.bond_rows])
            summary['bond_length'] = {
                'mean': float(lengths.mean()),
                'min': float(lengths.min()),
                'max': float(lengths.max()),
            }
        return summary
