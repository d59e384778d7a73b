#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
wikiids_cli.py — CLI de extracción de ids de Wikipedia
======================================================

Comandos:
- init-themes      Siembra temas de entrada (patrones de título, códigos de idioma,
                   y opcionalmente sustantivos comunes / lista blanca / diccionario)
- extract-ids      Volcado de Wikipedia → wikipediaIds[NeedsTranslation]_<lang>
- translate        needs-translation → wikipediaIds_<lang> (idiomas no principales)
- describe         Declaración (inputs/outputs/follow-ups) de la etapa en JSON
- summarize        Tabla resumen de reportes JSON de varias corridas
- pipeline-yaml    Ejecuta una pipeline declarativa en YAML
"""

from __future__ import annotations
import argparse
import glob
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from extractors import metrics
from extractors.config import ScanConfig
from extractors.stages import run_stage
from extractors.translator import EntityTranslator
from extractors.wiki_ids import WikiIdExtractor
from themes.registry import (
    ThemeRegistry, dump_json, TITLE_PATTERNS, LANGUAGE_CODE_MAPPING, PREFERRED_MEANINGS,
    TRANSITIVE_TYPE, ENTITY_DICTIONARY, WIKIPEDIA_IDS, WIKIPEDIA_IDS_NEEDS_TRANSLATION,
    TITLE_REPLACE, HAS_THREE_LETTER_CODE, IS_PREFERRED_MEANING_OF, HAS_TRANSLATION,
)
from titles.config import TitleConfig
from titles.rules import DEFAULT_TITLE_PATTERNS, LANGUAGE_CODES

# ---------------------------------------------------------------------------
# Logging global
# ---------------------------------------------------------------------------
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger("wikiids_cli")

# ============================================================================
# Helpers
# ============================================================================
def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    return [value] if isinstance(value, str) else [str(v) for v in value]


def _dump_paths(sargs: Dict[str, Any]) -> List[str]:
    """Volcados de una etapa: `dumps_glob` (uno o varios globs) + `dumps` explícitos, sin repetidos."""
    paths: List[str] = []
    for pattern in _as_list(sargs.get("dumps_glob")):
        paths.extend(sorted(glob.glob(pattern)))
    paths.extend(_as_list(sargs.get("dumps")))
    return list(dict.fromkeys(paths))


def _read_lines(path: str | Path) -> List[str]:
    """Una entrada por línea; ignora vacías y comentarios (#)."""
    out = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            out.append(line)
    return out


def _title_cfg(args: argparse.Namespace) -> TitleConfig:
    return TitleConfig(primary_language=getattr(args, "primary_language", "en") or "en")

# ============================================================================
# Commands
# ============================================================================
def cmd_init_themes(args: argparse.Namespace) -> None:
    registry = ThemeRegistry(args.themes_dir)

    registry.write_records(TITLE_PATTERNS, (
        {"subject": r["pattern"], "relation": TITLE_REPLACE, "object": r["replacement"]}
        for r in DEFAULT_TITLE_PATTERNS
    ))
    registry.write_records(LANGUAGE_CODE_MAPPING, (
        {"subject": iso2, "relation": HAS_THREE_LETTER_CODE, "object": iso3}
        for iso2, iso3 in LANGUAGE_CODES.items()
    ))

    if args.common_nouns:
        registry.write_records(PREFERRED_MEANINGS, (
            {"subject": f"wordnet_{w.lower().replace(' ', '_')}", "relation": IS_PREFERRED_MEANING_OF, "object": w}
            for w in _read_lines(args.common_nouns)
        ))
    if args.entities:
        registry.write_records(TRANSITIVE_TYPE, (
            {"subject": e, "relation": "rdf:type", "object": "owl:Thing"}
            for e in _read_lines(args.entities)
        ))
    for spec in args.dictionary or []:
        language, _, path = spec.partition("=")
        if not path:
            raise SystemExit(f"--dictionary espera LANG=ARCHIVO, recibido {spec!r}")
        pairs = [p for p in (line.split("\t", 1) for line in _read_lines(path)) if len(p) == 2]
        registry.write_records(ENTITY_DICTIONARY.in_language(language.strip().lower()), (
            {"subject": src.strip(), "relation": HAS_TRANSLATION, "object": dst.strip()}
            for src, dst in pairs
        ))
    logger.info("[INIT OK] temas en %s", registry.basedir)


def cmd_extract_ids(args: argparse.Namespace) -> None:
    registry = ThemeRegistry(args.themes_dir)
    stage = WikiIdExtractor(
        registry,
        language=args.language,
        dump=args.dump,
        title_cfg=_title_cfg(args),
        scan_cfg=ScanConfig(chunk_size=args.chunk_size, encoding=args.encoding),
    )
    if args.no_follow_ups:
        reports = {stage.name: stage.extract()}
    else:
        reports = run_stage(stage)

    summary = metrics.scan_summary(reports[stage.name]["counters"])
    logger.info("[EXTRACT OK] %s → %s | %s", args.dump, stage.output(), summary)
    if args.report:
        dump_json(args.report, {"stages": reports, "summary": summary})
        logger.info("[REPORT] %s", args.report)


def cmd_translate(args: argparse.Namespace) -> None:
    registry = ThemeRegistry(args.themes_dir)
    language = args.language.strip().lower()
    stage = EntityTranslator(
        registry,
        WIKIPEDIA_IDS_NEEDS_TRANSLATION.in_language(language),
        WIKIPEDIA_IDS.in_language(language),
    )
    run_stage(stage)


def cmd_describe(args: argparse.Namespace) -> None:
    stage = WikiIdExtractor(ThemeRegistry(args.themes_dir), language=args.language, title_cfg=_title_cfg(args))
    print(json.dumps(stage.spec().model_dump(mode="json"), indent=2, ensure_ascii=False))


def cmd_summarize(args: argparse.Namespace) -> None:
    runs: Dict[str, Any] = {}
    for path in args.reports:
        doc = json.loads(Path(path).read_text(encoding="utf-8"))
        for report in doc.get("stages", {}).values():
            if "language" in report and "counters" in report:
                runs[report["language"]] = report["counters"]
    table = metrics.stats_table(runs)
    print(table.to_string(index=False))

# ============================================================================
# Pipeline YAML
# ============================================================================
def cmd_pipeline_yaml(args: argparse.Namespace) -> None:
    conf = yaml.safe_load(Path(args.file).read_text(encoding="utf-8")) or {}
    themes_dir = conf.get("themes_dir", "themes_out")
    primary = conf.get("primary_language", "en")
    stages = conf.get("stages", [])

    for idx, stage in enumerate(stages, 1):
        name, sargs = stage["name"], stage.get("args", {})
        logger.info("[%d] ▶ Ejecutando etapa: %s", idx, name)

        if name == "init-themes":
            ns = argparse.Namespace(
                themes_dir=sargs.get("themes_dir", themes_dir),
                common_nouns=sargs.get("common_nouns"),
                entities=sargs.get("entities"),
                dictionary=sargs.get("dictionary", []),
            )
            cmd_init_themes(ns)

        elif name == "extract-ids":
            dumps = _dump_paths(sargs)
            for dump in dumps:
                ns = argparse.Namespace(
                    dump=dump,
                    language=sargs["language"],
                    themes_dir=sargs.get("themes_dir", themes_dir),
                    primary_language=sargs.get("primary_language", primary),
                    chunk_size=sargs.get("chunk_size", 1 << 16),
                    encoding=sargs.get("encoding", "utf-8"),
                    no_follow_ups=sargs.get("no_follow_ups", False),
                    report=sargs.get("report"),
                )
                cmd_extract_ids(ns)

        elif name == "translate":
            ns = argparse.Namespace(
                language=sargs["language"],
                themes_dir=sargs.get("themes_dir", themes_dir),
            )
            cmd_translate(ns)

        else:
            raise ValueError(f"Etapa desconocida en {args.file}: {name!r}")

# ============================================================================
# CLI Entrypoint
# ============================================================================
def build_wikiids_cli() -> argparse.ArgumentParser:
    cli = argparse.ArgumentParser(prog="wikiids", description="Extracción de ids de artículos de Wikipedia")
    cmds = cli.add_subparsers(dest="cmd", required=True)

    # init-themes
    it = cmds.add_parser("init-themes", help="Siembra los temas de entrada")
    it.add_argument("--themes-dir", default="themes_out")
    it.add_argument("--common-nouns", default=None, help="Archivo con un sustantivo común por línea")
    it.add_argument("--entities", default=None, help="Archivo con una entidad válida por línea (lista blanca)")
    it.add_argument("--dictionary", action="append", default=[],
                    help="LANG=ARCHIVO con pares 'entidad_extranjera<TAB>entidad' (repetible)")
    it.set_defaults(func=cmd_init_themes)

    # extract-ids
    ex = cmds.add_parser("extract-ids", help="Extrae ids de artículo de un volcado")
    ex.add_argument("dump", help="Volcado XML de Wikipedia (texto o .bz2)")
    ex.add_argument("--language", required=True)
    ex.add_argument("--themes-dir", default="themes_out")
    ex.add_argument("--primary-language", default="en")
    ex.add_argument("--chunk-size", type=int, default=1 << 16)
    ex.add_argument("--encoding", default="utf-8")
    ex.add_argument("--no-follow-ups", action="store_true", help="No encadenar la traducción")
    ex.add_argument("--report", default=None, help="Ruta del reporte JSON de la corrida")
    ex.set_defaults(func=cmd_extract_ids)

    # translate
    tr = cmds.add_parser("translate", help="Traduce subjects de un tema needs-translation")
    tr.add_argument("--language", required=True)
    tr.add_argument("--themes-dir", default="themes_out")
    tr.set_defaults(func=cmd_translate)

    # describe
    de = cmds.add_parser("describe", help="Muestra la declaración de la etapa")
    de.add_argument("--language", required=True)
    de.add_argument("--themes-dir", default="themes_out")
    de.add_argument("--primary-language", default="en")
    de.set_defaults(func=cmd_describe)

    # summarize
    su = cmds.add_parser("summarize", help="Resumen tabular de reportes JSON")
    su.add_argument("reports", nargs="+")
    su.set_defaults(func=cmd_summarize)

    # pipeline-yaml
    py = cmds.add_parser("pipeline-yaml", help="Ejecuta pipeline desde YAML")
    py.add_argument("--file", default="pipelines/pipeline.yaml")
    py.set_defaults(func=cmd_pipeline_yaml)

    return cli


def main(argv: List[str] | None = None) -> None:
    cli = build_wikiids_cli()
    args = cli.parse_args(argv)
    args.func(args)

if __name__ == "__main__":
    main()
