"""CLI for fmutils."""

import argparse
import json
import logging
import os
import sys

from google.protobuf import json_format

from fmutils.descriptors import DescriptorLoadError, DescriptorSetContents, DescriptorSetReader, message_class
from fmutils.domain.enums import TraversalMode
from fmutils.domain.models import ApplyOptions, ApplyResult
from fmutils.mask import NestedMask, WildcardNestedMask

logger = logging.getLogger(__name__)


def _mask_class(wildcard: bool) -> type[NestedMask]:
    return WildcardNestedMask if wildcard else NestedMask


def apply_json_file(
    input_path: str,
    output_path: str | None,
    options: ApplyOptions,
    descriptors: DescriptorSetContents,
) -> ApplyResult:
    """Main orchestration: JSON message -> filter/prune -> JSON output.

    input_path and output_path accept '-' (or None for output) for stdin/stdout.
    """
    message_type = message_class(descriptors, options.message_type)

    if input_path == '-':
        text = sys.stdin.read()
    else:
        with open(input_path, encoding='utf-8') as f:
            text = f.read()

    message = json_format.Parse(text, message_type(), descriptor_pool=descriptors.pool)
    fields_before = len(message.ListFields())

    mask = _mask_class(options.wildcard).from_paths(options.paths)
    logger.debug("%s %s with %r", options.mode.value, options.message_type, mask)
    if options.mode is TraversalMode.FILTER:
        mask.filter(message)
    else:
        mask.prune(message)

    output = json_format.MessageToJson(
        message,
        preserving_proto_field_name=True,
        indent=2 if options.pretty else None,
        descriptor_pool=descriptors.pool,
    )

    if output_path and output_path != '-':
        os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(output + '\n')
    else:
        print(output)
        output_path = None

    return ApplyResult(
        message_type=options.message_type,
        mode=options.mode,
        fields_before=fields_before,
        fields_after=len(message.ListFields()),
        output_path=output_path,
    )


def _split_paths(values: list[str]) -> list[str]:
    paths: list[str] = []
    for value in values:
        paths.extend(p.strip() for p in value.split(',') if p.strip())
    return paths


def _add_apply_parser(subparsers, mode: TraversalMode, help_text: str) -> None:
    p = subparsers.add_parser(mode.value, help=help_text)
    p.add_argument('input', help="JSON-encoded message file ('-' for stdin)")
    p.add_argument('--descriptor-set', required=True, help='FileDescriptorSet built with protoc --include_imports')
    p.add_argument('--type', required=True, dest='message_type', help='Fully qualified message type name')
    p.add_argument('--paths', action='append', default=[], help='Comma-separated field paths (repeatable)')
    p.add_argument('--wildcard', action='store_true', help='Allow "*" segments in paths')
    p.add_argument('-o', '--output', help='Output file (default: stdout)')
    p.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')
    p.set_defaults(mode=mode)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog='fmutils', description='Protobuf field mask utilities')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command')

    # mask command
    mask_parser = subparsers.add_parser('mask', help='Print the mask tree compiled from paths')
    mask_parser.add_argument('paths', nargs='*', help='Field paths')
    mask_parser.add_argument('--wildcard', action='store_true', help='Allow "*" segments in paths')

    _add_apply_parser(subparsers, TraversalMode.FILTER, 'Keep only the listed fields')
    _add_apply_parser(subparsers, TraversalMode.PRUNE, 'Clear the listed fields')

    # types command
    types_parser = subparsers.add_parser('types', help='List message types in a descriptor set')
    types_parser.add_argument('--descriptor-set', required=True, help='FileDescriptorSet file')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(module)s - %(message)s',
        stream=sys.stderr,
    )

    if args.command == 'mask':
        mask = _mask_class(args.wildcard).from_paths(args.paths)
        print(json.dumps(mask.to_dict(), indent=2, sort_keys=True))

    elif args.command in (TraversalMode.FILTER.value, TraversalMode.PRUNE.value):
        if args.input != '-' and not os.path.isfile(args.input):
            print(f"Error: {args.input} not found", file=sys.stderr)
            sys.exit(1)

        options = ApplyOptions(
            message_type=args.message_type,
            paths=_split_paths(args.paths),
            mode=args.mode,
            wildcard=args.wildcard,
            pretty=not args.no_pretty,
        )
        try:
            descriptors = DescriptorSetReader().read(args.descriptor_set)
            result = apply_json_file(args.input, args.output, options, descriptors)
        except (DescriptorLoadError, json_format.ParseError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        logger.info(
            "%s %s: %d -> %d top-level fields",
            result.mode.value, result.message_type, result.fields_before, result.fields_after,
        )
        if result.output_path:
            print(f"Output: {result.output_path}")

    elif args.command == 'types':
        try:
            contents = DescriptorSetReader().read(args.descriptor_set)
        except DescriptorLoadError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        for t in sorted(contents.message_types):
            print(f"  {t}")

    else:
        parser.print_help()


if __name__ == '__main__':
    main()
