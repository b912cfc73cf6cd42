from __future__ import annotations

import argparse
from pathlib import Path

from bounded_rng.analysis.reducers import REDUCER_NAMES
from bounded_rng.analysis.uniformity import check_uniformity
from bounded_rng.config import SamplerParams
from bounded_rng.core.rng_utils import SOURCE_NAMES, make_source
from bounded_rng.core.sampler import sample_bounded
from bounded_rng.io.results import write_report


def _read_protocol(path: Path) -> dict:
    """Read sampler settings from YAML, at top level or under ``sampler:``."""
    try:
        import yaml  # type: ignore
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError("Reading --protocol files needs PyYAML (pip install pyyaml).") from exc
    document = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(document, dict):
        raise ValueError(f"{path}: expected a mapping of sampler settings, got {type(document).__name__}")
    section = document.get("sampler", document)
    if not isinstance(section, dict):
        raise ValueError(f"{path}: the 'sampler' section must be a mapping")
    return section


def _build_params(args: argparse.Namespace) -> SamplerParams:
    if getattr(args, "protocol", ""):
        params = SamplerParams.from_mapping(_read_protocol(Path(args.protocol).resolve()))
    else:
        params = SamplerParams()
    # Explicit command-line values win over the protocol file.
    for name in ("bound", "count", "samples", "bins", "significance", "seed", "source", "method"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(params, name, value)
    return params


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--range", "--bound", dest="bound", default=None, type=int)
    parser.add_argument("--seed", default=None, type=int)
    parser.add_argument("--source", choices=SOURCE_NAMES, default=None, type=str)
    parser.add_argument("--protocol", default="", type=str, help="YAML config path")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Bounded uniform integers via Lemire's method")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sample_parser = subparsers.add_parser("sample", help="Print a few samples in [0, range)")
    _add_common_arguments(sample_parser)
    sample_parser.add_argument("--count", default=None, type=int)

    uniformity_parser = subparsers.add_parser("uniformity", help="Chi-squared check of a reducer")
    _add_common_arguments(uniformity_parser)
    uniformity_parser.add_argument("--samples", default=None, type=int)
    uniformity_parser.add_argument("--bins", default=None, type=int, help="0 keeps one bin per value")
    uniformity_parser.add_argument("--significance", default=None, type=float)
    uniformity_parser.add_argument("--method", choices=REDUCER_NAMES, default=None, type=str)
    uniformity_parser.add_argument("--output-json", default="", type=str)

    args = parser.parse_args(argv)
    params = _build_params(args)
    source = make_source(params.source, params.seed)

    if args.command == "sample":
        try:
            for _ in range(params.count):
                value = sample_bounded(params.bound, source)
                print(f"Random number in [0, {params.bound}[: {value}")
        except ValueError as exc:
            parser.error(str(exc))
        return
    if args.command == "uniformity":
        try:
            report = check_uniformity(
                params.bound,
                params.samples,
                source,
                method=params.method,
                bins=params.bins,
                significance=params.significance,
            )
        except ValueError as exc:
            parser.error(str(exc))
        print(report.summary())
        if args.output_json:
            print(write_report(Path(args.output_json).resolve(), report))
        return


if __name__ == "__main__":
    main()
