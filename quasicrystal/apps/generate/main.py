#!/usr/bin/env python3
"""
CLI entrypoint for quasicrystal generation.

Loads the YAML configuration, applies command line overrides, generates the
requested family (or periodic lattice), builds bonds and exports the result.
"""
import argparse
import logging
import sys
from typing import Any, Dict, Optional, Sequence

import yaml

from quasicrystal.pkgs.engine_runtime import (
    GenerateRequest, LatticeRequest, QuasicrystalService
)
from quasicrystal.pkgs.models import available_families

logger = logging.getLogger(__name__)


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'log_level': 'INFO',
        'generation': {
            'family': 'penrose',
            'method': 'projection',
            'radius': 3.0,
            'n_points': 20,
            'generations': 3,
        },
        'graph': {
            'cutoff': 2.0,
        },
        'lattice': {
            'topology': 'square',
            'Lx': 4,
            'Ly': 4,
            'boundary': 'periodic',
            'index_method': 'linear',
        },
        'output': {
            'path': './output/quasicrystal',
            'format': 'jsonl',
        },
    }


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from YAML file, merged over the defaults."""
    config = get_default_config()
    if not config_path:
        return config
    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        logger.info(f"Loaded configuration from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Config file not found: {config_path}")
        return config
    except yaml.YAMLError as e:
        logger.error(f"Error parsing config file: {e}")
        sys.exit(1)

    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value
    return config


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Command line values win over the configuration file."""
    gen = config['generation']
    for key in ('family', 'method', 'radius', 'n_points', 'generations'):
        value = getattr(args, key)
        if value is not None:
            gen[key] = value
    if args.cutoff is not None:
        config['graph']['cutoff'] = args.cutoff
    if args.output is not None:
        config['output']['path'] = args.output
    if args.format is not None:
        config['output']['format'] = args.format
    if args.log_level is not None:
        config['log_level'] = args.log_level
    return config


def run(config: Dict[str, Any], periodic: bool = False) -> str:
    """Generate, build bonds, export. Returns the export path."""
    service = QuasicrystalService(config)

    if periodic:
        result = service.build_lattice(LatticeRequest(**config['lattice']))
    else:
        gen = config['generation']
        cutoff = config['graph'].get('cutoff')
        # only the family's seed parameter is used
        result = service.generate(GenerateRequest(
            family=gen['family'],
            method=gen.get('method', 'projection'),
            radius=gen.get('radius'),
            n_points=gen.get('n_points'),
            generations=gen.get('generations'),
            cutoff=cutoff if cutoff and cutoff > 0 else None,
        ))

    logger.info(f"Result: {result.model_dump()}")
    output = config['output']
    path = service.export(output.get('format', 'jsonl'), output['path'])
    logger.info(f"Snapshot: {service.snapshot()}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Quasicrystal generation CLI",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--config', '-c', type=str, default='configs/default.yaml',
                        help='Path to configuration file')
    parser.add_argument('--family', type=str, choices=available_families(),
                        help='Quasicrystal family')
    parser.add_argument('--method', '-m', type=str, choices=['projection', 'substitution'],
                        help='Generation method')
    parser.add_argument('--radius', '-r', type=float, help='Radius for 2D projection')
    parser.add_argument('--n-points', type=int, help='Number of points for Fibonacci projection')
    parser.add_argument('--generations', '-g', type=int, help='Substitution generations')
    parser.add_argument('--cutoff', type=float, help='Bond cutoff distance (0 disables bonds)')
    parser.add_argument('--periodic', action='store_true',
                        help='Build the configured periodic lattice instead')
    parser.add_argument('--output', '-o', type=str, help='Output file path prefix')
    parser.add_argument('--format', '-f', type=str, choices=['csv', 'jsonl', 'parquet'],
                        help='Output format')
    parser.add_argument('--log-level', type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    return parser


def main(argv: Optional[Sequence[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level or 'INFO'),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    config = apply_overrides(load_config(args.config), args)
    logger.info(f"Configuration: {config}")
    run(config, periodic=args.periodic)


if __name__ == '__main__':
    main()
