"""CSV navigation database adapter.

Loads fixes, airways and procedures from three CSV files:

- fixes.csv: ident, icao_code, lat, lon, type
- airways.csv: airway_id, ident, seq, fix_ident, fix_icao_code
- procedures.csv: procedure_id, airport, kind (SID/STAR), ident,
  runways (space separated, blank = all), transition (blank = common
  route), seq, fix_ident, fix_icao_code

Airway and procedure rows reference fixes by ident and ICAO region.
Rows referencing an unknown fix are skipped with a warning.
"""

from __future__ import annotations

import csv
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ...config import NavDataConfig, get_config
from ...domain.errors import NavDataError
from ...domain.models import Airway, Coordinates, Fix, Procedure, ProcedureTransition

SID = "SID"
STAR = "STAR"


def _read_rows(path: Path) -> Iterator[Dict[str, str]]:
    with path.open(encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            yield {key: (value or "").strip() for key, value in row.items() if key}


@dataclass
class _ProcedureRows:
    airport: str
    kind: str
    ident: str
    runways: Tuple[str, ...]
    legs: List[Tuple[int, Fix]] = field(default_factory=list)
    transitions: Dict[str, List[Tuple[int, Fix]]] = field(default_factory=dict)


@dataclass
class CSVNavDatabase:
    """Navigation database loaded from CSV files.

    This adapter implements NavDatabasePort. Data is loaded lazily on
    the first lookup and kept in memory.

    Attributes:
        config: Navigation data configuration (paths, file names)
    """

    config: NavDataConfig = field(default_factory=lambda: get_config().navdata)
    _logger: logging.Logger = field(init=False, repr=False)

    _fixes: Optional[Dict[str, List[Fix]]] = field(default=None, repr=False)
    _airways: Optional[Dict[str, List[Airway]]] = field(default=None, repr=False)
    _procedures: Optional[Dict[str, List[Procedure]]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def search_fixes(self, ident: str) -> Sequence[Fix]:
        self._ensure_loaded()
        assert self._fixes is not None
        return tuple(self._fixes.get(ident, ()))

    def search_airways(self, ident: str, via_fix: Fix) -> Sequence[Airway]:
        self._ensure_loaded()
        assert self._airways is not None
        return tuple(airway for airway in self._airways.get(ident, ()) if airway.contains(via_fix))

    def get_departures(self, airport: str, runway: Optional[str] = None) -> Sequence[Procedure]:
        return tuple(
            procedure
            for procedure in self._procedures_of(SID, airport)
            if procedure.serves_runway(runway)
        )

    def get_arrivals(self, airport: str) -> Sequence[Procedure]:
        return tuple(self._procedures_of(STAR, airport))

    def clear_cache(self) -> None:
        """Forget loaded data; the next lookup reloads the files."""
        self._fixes = None
        self._airways = None
        self._procedures = None
        self._logger.debug("Navigation data cache cleared")

    def _procedures_of(self, kind: str, airport: str) -> Iterator[Procedure]:
        self._ensure_loaded()
        assert self._procedures is not None
        for procedure in self._procedures.get(kind, ()):
            if procedure.airport == airport:
                yield procedure

    def _ensure_loaded(self) -> None:
        if self._fixes is not None:
            return

        self._logger.debug(
            "Loading navigation data",
            extra={"data_dir": str(self.config.data_dir)},
        )

        path = self.config.fixes_path
        try:
            fixes = self._load_fixes(path)
            index = {(fix.ident, fix.icao_code): fix for group in fixes.values() for fix in group}
            path = self.config.airways_path
            airways = self._load_airways(path, index)
            path = self.config.procedures_path
            procedures = self._load_procedures(path, index)
        except (OSError, KeyError, ValueError) as e:
            raise NavDataError(
                f"Failed to load navigation data: {e}",
                file_path=str(path),
                cause=e,
            )

        self._fixes, self._airways, self._procedures = fixes, airways, procedures
        self._logger.info(
            "Navigation data loaded",
            extra={
                "fixes": sum(len(group) for group in fixes.values()),
                "airways": sum(len(group) for group in airways.values()),
                "procedures": sum(len(group) for group in procedures.values()),
            },
        )

    def _load_fixes(self, path: Path) -> Dict[str, List[Fix]]:
        fixes: Dict[str, List[Fix]] = defaultdict(list)
        for row in _read_rows(path):
            ident = row["ident"]
            if not ident:
                continue
            icao_code = row.get("icao_code", "")
            fixes[ident].append(
                Fix(
                    ident=ident,
                    icao_code=icao_code,
                    location=Coordinates(float(row["lat"]), float(row["lon"])),
                    database_id=f"{row.get('type', 'wpt')}:{icao_code}:{ident}",
                )
            )
        return dict(fixes)

    def _resolve(
        self, index: Dict[Tuple[str, str], Fix], row: Dict[str, str], owner: str
    ) -> Optional[Fix]:
        fix = index.get((row["fix_ident"], row.get("fix_icao_code", "")))
        if fix is None:
            self._logger.warning(
                "Unknown fix referenced, skipping row",
                extra={"owner": owner, "fix": row["fix_ident"]},
            )
        return fix

    def _load_airways(
        self, path: Path, index: Dict[Tuple[str, str], Fix]
    ) -> Dict[str, List[Airway]]:
        rows_by_airway: Dict[Tuple[str, str], List[Tuple[int, Fix]]] = defaultdict(list)
        for row in _read_rows(path):
            fix = self._resolve(index, row, row["ident"])
            if fix is not None:
                rows_by_airway[(row["airway_id"], row["ident"])].append((int(row["seq"]), fix))

        airways: Dict[str, List[Airway]] = defaultdict(list)
        for (airway_id, ident), rows in rows_by_airway.items():
            ordered = tuple(fix for _, fix in sorted(rows, key=lambda r: r[0]))
            airways[ident].append(Airway(ident=ident, fixes=ordered, database_id=f"AWY:{airway_id}"))
        return dict(airways)

    def _load_procedures(
        self, path: Path, index: Dict[Tuple[str, str], Fix]
    ) -> Dict[str, List[Procedure]]:
        grouped: Dict[str, _ProcedureRows] = {}
        for row in _read_rows(path):
            procedure_id = row["procedure_id"]
            kind = row["kind"].upper()
            if kind not in (SID, STAR):
                raise ValueError(f"Unknown procedure kind {kind!r} for {procedure_id}")

            rows = grouped.setdefault(
                procedure_id,
                _ProcedureRows(
                    airport=row["airport"],
                    kind=kind,
                    ident=row["ident"],
                    runways=tuple(row.get("runways", "").split()),
                ),
            )
            fix = self._resolve(index, row, row["ident"])
            if fix is None:
                continue

            transition = row.get("transition", "")
            target = rows.transitions.setdefault(transition, []) if transition else rows.legs
            target.append((int(row["seq"]), fix))

        def ordered(entries: List[Tuple[int, Fix]]) -> Tuple[Fix, ...]:
            return tuple(fix for _, fix in sorted(entries, key=lambda entry: entry[0]))

        procedures: Dict[str, List[Procedure]] = {SID: [], STAR: []}
        for procedure_id, rows in grouped.items():
            transitions = tuple(
                ProcedureTransition(
                    ident=name,
                    legs=ordered(legs),
                    database_id=f"{rows.kind}:{procedure_id}:{name}",
                )
                for name, legs in rows.transitions.items()
            )
            procedures[rows.kind].append(
                Procedure(
                    ident=rows.ident,
                    airport=rows.airport,
                    runways=rows.runways,
                    legs=ordered(rows.legs),
                    enroute_transitions=transitions,
                    database_id=f"{rows.kind}:{procedure_id}",
                )
            )
        return procedures
