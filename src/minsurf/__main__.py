#!/usr/bin/env python3
## Copyright (c) 2026 minsurf contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
"""
Command line access to the minsurf tessellator.

Usage:
    python -m minsurf list
    python -m minsurf mesh [--config FILE] [--surface NAME] [--u-steps N]
                           [--v-steps N] [--wireframe] [--json] [-v]

Examples:
    # Show the registered surfaces and their parameter domains
    python -m minsurf list

    # Tessellate Sievert's surface on an 80x40 grid and report the mesh
    python -m minsurf mesh --surface sievert --u-steps 80 --v-steps 40

    # Same, as JSON, using settings from a YAML file
    python -m minsurf mesh --config viewer.yaml --json
"""

import argparse
import json
import logging
import sys

from .config import load_config
from .logging_config import setup_logging
from .surfaces import SURFACES, available_surfaces
from .tessellate import MAX_UINT16_VERTICES, Mesh, Topology


def cmd_list(args) -> int:
    """List registered surfaces."""
    for name in available_surfaces():
        u_min, u_max, v_min, v_max = SURFACES[name]().domain_bounds()
        print(f"{name:<10} u: [{u_min:.4f}, {u_max:.4f}]  v: [{v_min:.4f}, {v_max:.4f}]")
    return 0


def mesh_summary(config, result) -> dict:
    """Describe a tessellation result as a JSON-friendly dict."""
    summary = {
        "surface": config.surface,
        "topology": result.topology.value,
        "u_steps": result.grid.u_steps,
        "v_steps": result.grid.v_steps,
        "vertices": len(result.vertices),
        "nonfinite_vertices": result.nonfinite_count(),
        "bounding_box": result.bounding_box(),
    }
    if isinstance(result, Mesh):
        summary["triangles"] = result.triangle_count
        summary["degenerate_triangles"] = result.degenerate_count()
        summary["area"] = result.surface_area()
        summary["uint16_indices"] = len(result.vertices) <= MAX_UINT16_VERTICES
    else:
        summary["line_strips"] = len(result.strips)
    return summary


def cmd_mesh(args) -> int:
    """Tessellate the configured surface and report on the result."""
    config = load_config(args.config)
    changes = {}
    if args.surface is not None:
        changes["surface"] = args.surface
        if args.surface != config.surface:
            changes["surface_params"] = {}
    if args.u_steps is not None:
        changes["u_steps"] = args.u_steps
    if args.v_steps is not None:
        changes["v_steps"] = args.v_steps
    if args.wireframe:
        changes["topology"] = Topology.WIREFRAME.value
    config = config.updated(**changes)

    summary = mesh_summary(config, config.tessellate())

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        for key, value in summary.items():
            print(f"{key:<20} {value}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="minsurf",
        description="Tessellate parametric minimal surfaces",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="log progress (-vv for debug output)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List available surfaces")
    list_parser.set_defaults(func=cmd_list)

    mesh_parser = subparsers.add_parser("mesh", help="Tessellate a surface")
    mesh_parser.add_argument("--config", default=None, help="YAML configuration file")
    mesh_parser.add_argument("--surface", default=None,
                             help=f"surface name, one of {available_surfaces()}")
    mesh_parser.add_argument("--u-steps", default=None, help="grid cells along u")
    mesh_parser.add_argument("--v-steps", default=None, help="grid cells along v")
    mesh_parser.add_argument("--wireframe", action="store_true",
                             help="emit u/v line strips instead of triangles")
    mesh_parser.add_argument("--json", action="store_true", help="print JSON")
    mesh_parser.set_defaults(func=cmd_mesh)

    args = parser.parse_args(argv)

    if args.verbose:
        # stdout carries the command output
        setup_logging(logging.DEBUG if args.verbose > 1 else logging.INFO,
                      stream=sys.stderr)

    try:
        return args.func(args)
    except (ValueError, KeyError, FileNotFoundError) as exc:
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(f"error: {message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
