#!/usr/bin/env python
"""
Spring Follow CLI - Headless runs of the semi-implicit Euler follow constraint

Usage:
    spring-follow [options]

Examples:
    spring-follow                                  # Default follower chasing a teleporting target
    spring-follow --motion orbit --preset snappy   # Smooth orbit with known velocity
    spring-follow --chain 4 --preset tail          # Four-link tail
    spring-follow --dt 0.5 -o run.csv              # Large steps, export every tick
"""

import argparse
import logging
import sys


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='spring-follow',
        description="Semi-implicit Euler spring follow, run headless",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Target Motions:
  teleport  - Random jump every second, no reported velocity
  orbit     - Circle in the XZ plane, reports velocity
  step      - Single jump, no reported velocity
  linear    - Constant velocity, reports velocity
  static    - Fixed point

Tuning:
  frequency - Natural frequency in Hz (> 0)
  damping   - 0 oscillates forever, 1 is critically damped
  response  - 0 eases in, > 1 overshoots, < 0 anticipates

Examples:
  %(prog)s --motion step --response 0        # No anticipation
  %(prog)s --motion step --response -1.5     # Wind up before following
  %(prog)s --list-presets                    # Show all presets
  %(prog)s --preset-info camera_lag          # Show preset details
        """
    )

    parser.add_argument(
        '-m', '--motion',
        type=str,
        default='teleport',
        choices=['teleport', 'orbit', 'step', 'linear', 'static'],
        help='Target motion (default: teleport)'
    )

    parser.add_argument(
        '-p', '--preset',
        type=str,
        default=None,
        help='Tuning preset (see --list-presets)'
    )

    parser.add_argument('--frequency', type=float, default=None, help='Frequency in Hz (default: 1.0)')
    parser.add_argument('--damping', type=float, default=None, help='Damping ratio (default: 0.5)')
    parser.add_argument('--response', type=float, default=None, help='Response (default: 2.0)')

    parser.add_argument(
        '--dt',
        type=float,
        default=1.0 / 60.0,
        help='Seconds per tick (default: 1/60)'
    )

    parser.add_argument(
        '-t', '--ticks',
        type=int,
        default=600,
        help='Number of ticks (default: 600)'
    )

    parser.add_argument(
        '-c', '--chain',
        type=int,
        default=1,
        help='Number of chained followers (default: 1)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for random target motion'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Export trajectory to .csv or .json'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List all tuning presets'
    )

    parser.add_argument(
        '--preset-info',
        type=str,
        default=None,
        metavar='NAME',
        help='Show details for a preset'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Debug logging and tracebacks'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s'
    )

    # Handle preset listing/info
    if args.list_presets:
        from .core.presets import get_preset_manager
        manager = get_preset_manager()

        print("Available Tuning Presets:\n")
        for name in manager.list_all():
            preset = manager.get(name)
            desc = preset.description[:50] + "..." if len(preset.description) > 50 else preset.description
            print(f"  {name:<12} f={preset.frequency:<5g} z={preset.damping:<5g} r={preset.response:<5g} - {desc}")

        print(f"\nTotal: {len(manager.list_all())} presets")
        print("\nUsage: --preset <name>")
        print("Details: --preset-info <name>")
        return 0

    if args.preset_info:
        from .core.presets import get_preset_manager
        info = get_preset_manager().get_preset_info(args.preset_info)
        if not info:
            print(f"Error: Preset '{args.preset_info}' not found")
            print("Use --list-presets to see available presets")
            return 1

        print(f"Preset: {info['name']}")
        print(f"Description: {info['description']}")
        print("\nTuning:")
        print(f"  Frequency: {info['frequency']}")
        print(f"  Damping: {info['damping']}")
        print(f"  Response: {info['response']}")
        print("\nConstants:")
        print(f"  k1: {info['k1']:.6f}")
        print(f"  k2: {info['k2']:.6f}")
        print(f"  k3: {info['k3']:.6f}")
        print(f"\nTags: {', '.join(info['tags'])}")
        print(f"Source: {'built-in' if info['is_builtin'] and not info['is_user'] else 'user'}")
        return 0

    from . import simulate

    try:
        trajectory = simulate(
            motion=args.motion,
            ticks=args.ticks,
            dt=args.dt,
            chain=args.chain,
            preset=args.preset,
            output_path=args.output,
            seed=args.seed,
            frequency=args.frequency,
            damping=args.damping,
            response=args.response,
        )
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    print(f"Motion: {args.motion}")
    print(f"Ran {len(trajectory)} ticks at dt={args.dt:g} ({len(trajectory) * args.dt:.2f}s)")
    print()
    for handle, meta in trajectory.metadata['followers'].items():
        line = (
            f"  {handle!s:<10} -> {meta['target']!s:<10} "
            f"f={meta['frequency']:g} z={meta['damping']:g} r={meta['response']:g}"
        )
        if len(trajectory):
            line += (
                f"  final distance {trajectory.final_distance(handle):.4f}"
                f"  peak speed {trajectory.peak_speed(handle):.3f}"
            )
        print(line)

    missing = trajectory.missing_count()
    if missing:
        print(f"\nMissing-target ticks: {missing}")

    if args.output:
        print(f"\nOutput: {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
