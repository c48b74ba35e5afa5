import logging
import subprocess
from argparse import ArgumentParser
from pathlib import Path
from typing import Optional

from exprgen import DefaultGeneratorRng, Expr, GenConfig, generate
from exprgen.parser import ExprParser

from driver import check_round_trip, evaluate

logger = logging.getLogger('exprgen.fuzz')


def format_diagnostic(
    expr: Expr,
    round_trip: bool,
    result: Optional[str],
    error: Optional[str] = None,
) -> str:
    lines = [
        '  ---',
        f'  expr: {expr}',
        f'  round_trip: {"ok" if round_trip else "mismatch"}',
    ]

    if result is not None:
        lines.append(f'  result: {result}')
    if error is not None:
        lines.append(f'  error: {error}')

    lines.append('  ...')

    return '\n'.join(lines)


def main(argv: Optional[list[str]] = None):
    parser = ArgumentParser(description='C expression fuzzer.')

    parser.add_argument(
        '-n',
        '--trials',
        type=int,
        default=10,
        help='number of expressions to generate',
    )
    parser.add_argument(
        '-s',
        '--seed',
        type=int,
        default=None,
        help='seed for the random stream',
    )
    parser.add_argument(
        '-c',
        '--config',
        type=Path,
        default=None,
        help='JSON generation config',
    )
    parser.add_argument(
        '-e',
        '--eval',
        dest='eval_cmd',
        default=None,
        help='evaluator command, reads the expression on stdin',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='show metadata for passing tests',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='enable debug logging',
    )

    opts = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if opts.debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    print('TAP version 14')
    print(f'1..{opts.trials}')

    try:
        config = GenConfig.load(opts.config) if opts.config else GenConfig()
        rng = DefaultGeneratorRng(opts.seed)
        reparser = ExprParser()

        logger.debug('config: %s', config)

        for _ in range(opts.trials):
            expr = generate(config, rng)

            round_trip = check_round_trip(expr, reparser)
            result = error = None

            if opts.eval_cmd is not None:
                try:
                    result = evaluate(str(expr), opts.eval_cmd)
                except subprocess.CalledProcessError as e:
                    error = f'evaluator exited with status {e.returncode}'

            passed = round_trip and error is None

            if passed and not opts.verbose:
                print(f'ok - {expr}')
            else:
                print('ok' if passed else 'not ok')
                print(format_diagnostic(expr, round_trip, result, error))
    except Exception as e:
        print('Bail out!', e)


if __name__ == '__main__':
    main()
