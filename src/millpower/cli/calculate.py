"""
Command-line interface for the milling power calculator.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from ..calculator.core import calculate_motor_power
from ..calculator.output import to_json, to_markdown, to_summary
from ..calculator.validation import validate_parameters
from ..io.loaders import load_parameters_dict, parameters_from_dict, save_result_json
from ..io.presets import DEFAULT_PRESETS, apply_preset

logger = logging.getLogger(__name__)

# (argument, dest, help)
PARAMETER_ARGUMENTS = (
    ('--kc11', 'kc11', 'Specific cutting force kc1.1 in N/mm²'),
    ('--one-minus-mc', 'one_minus_mc', 'Material exponent 1 - mc'),
    ('-D', 'D', 'Tool diameter in mm'),
    ('-Z', 'Z', 'Number of teeth'),
    ('--ae', 'ae', 'Radial depth of cut in mm'),
    ('--ap', 'ap', 'Axial depth of cut in mm'),
    ('--vc', 'vc', 'Cutting speed in m/min'),
    ('--fz', 'fz', 'Feed per tooth in mm'),
    ('--kr', 'kr_deg', 'Cutting-edge angle in degrees'),
    ('--eta', 'eta_percent', 'Mechanical efficiency in %%'),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="millpower",
        description="Calculate the motor power required for a peripheral milling cut",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Carbon steel, 20 mm 4-flute cutter
  millpower --preset carbon_steel -D 20 -Z 4 --ae 5 --ap 10 --vc 300 --fz 0.1 --kr 90 --eta 80

  # Parameters from a JSON file, command-line values override
  millpower --input cut.json --ap 12

  # Markdown derivation, saved JSON result
  millpower --input cut.json --format markdown --save-json result.json

  # AI analysis and spoken result (needs GEMINI_API_KEY)
  millpower --input cut.json --analyze --speak power.mp3
        """
    )

    parser.add_argument(
        '-i', '--input',
        type=str,
        default=None,
        help='JSON file with cutting parameters'
    )

    parser.add_argument(
        '--preset',
        type=str,
        choices=sorted(DEFAULT_PRESETS),
        default=None,
        help='Material preset (fills kc1.1, 1 - mc and material name)'
    )

    parser.add_argument(
        '--material-name',
        type=str,
        default=None,
        help='Material name for the analysis'
    )

    # Values stay strings so they are parsed like form fields (decimal comma allowed)
    for flag, dest, help_text in PARAMETER_ARGUMENTS:
        parser.add_argument(flag, dest=dest, type=str, default=None, help=help_text)

    parser.add_argument(
        '-f', '--format',
        choices=['summary', 'markdown', 'json'],
        default='summary',
        help='Output format (default: summary)'
    )

    parser.add_argument(
        '--save-json',
        type=str,
        default=None,
        help='Save the result with its parameters as JSON'
    )

    parser.add_argument(
        '--analyze',
        action='store_true',
        help='Ask the AI assistant for an analysis of the parameters'
    )

    parser.add_argument(
        '--speak',
        type=str,
        default=None,
        metavar='MP3_FILE',
        help='Synthesize the motor power as speech and save it as MP3'
    )

    parser.add_argument(
        '--env-file',
        type=str,
        default=None,
        help='.env file with GEMINI_API_KEY (default: search from current directory)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging, including every step value'
    )

    return parser


def _read_inputs(args) -> dict:
    """Merge the JSON file, preset and command-line values, in that order."""
    raw = load_parameters_dict(args.input) if args.input else {}

    if args.preset:
        raw = apply_preset(raw, args.preset, DEFAULT_PRESETS)

    for _, dest, _ in PARAMETER_ARGUMENTS:
        value = getattr(args, dest)
        if value is not None:
            raw[dest] = value

    if args.material_name is not None:
        raw['material_name'] = args.material_name

    return raw


async def _run_assistant(args, params, result) -> None:
    """Analysis and speech are independent; a failure in one does not stop the other."""
    from ..config import Settings
    from ..services.assistant import AssistantError, GeminiAssistant

    settings = Settings.from_env(args.env_file)

    async with GeminiAssistant(settings) as assistant:
        tasks = []
        if args.analyze:
            tasks.append(assistant.summarize(params, result))
        if args.speak:
            tasks.append(assistant.speak_result(result))
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    outcomes = list(outcomes)
    if args.analyze:
        analysis = outcomes.pop(0)
        if isinstance(analysis, AssistantError):
            logger.warning(f"Analysis unavailable: {analysis}")
        elif isinstance(analysis, BaseException):
            raise analysis
        else:
            print("\n═══ Analysis ═══")
            print(analysis)

    if args.speak:
        audio = outcomes.pop(0)
        if isinstance(audio, AssistantError):
            logger.warning(f"Speech unavailable: {audio}")
        elif isinstance(audio, BaseException):
            raise audio
        else:
            try:
                Path(args.speak).write_bytes(audio)
            except OSError as e:
                logger.warning(f"Could not save speech: {e}")
            else:
                print(f"\nSaved speech: {args.speak}")


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        raw = _read_inputs(args)
    except (OSError, ValueError) as e:
        print(f"Error loading parameters: {e}", file=sys.stderr)
        return 2

    params = parameters_from_dict(raw)
    validation = validate_parameters(params)
    for msg in validation.warnings:
        logger.warning(f"{msg.code}: {msg.message}")

    result = calculate_motor_power(params)

    if args.format == 'json':
        print(to_json(result, params=params, validation=validation))
    elif args.format == 'markdown':
        print(to_markdown(result, params=params, validation=validation))
    else:
        print(to_summary(result))

    if args.save_json:
        try:
            save_result_json(result, args.save_json, params=params, validation=validation)
        except OSError as e:
            print(f"Error saving result: {e}", file=sys.stderr)
            return 2

    if result.ok and (args.analyze or args.speak):
        asyncio.run(_run_assistant(args, params, result))
    elif args.analyze or args.speak:
        logger.warning("Skipping AI features: the calculation did not produce a motor power")

    return 0 if result.ok else 1


if __name__ == '__main__':
    sys.exit(main())
