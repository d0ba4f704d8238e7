import argparse
import json
import logging

import yaml

from topic_tubes.matcher import TopicMatcher
from topic_tubes.topic import SUBSCRIBE, PUBLISH, ROOT, words, triples, \
    topic_type, validate, match


def print_words(topic, as_json=False):
    lst = words(topic)
    if as_json:
        print(json.dumps(lst))
    else:
        for word in lst:
            print(word)
    return 0


def print_triples(topic):
    for prefix, suffix, whole in triples(topic):
        prefix = repr(ROOT) if prefix is ROOT else json.dumps(prefix)
        print(f"{prefix} {json.dumps(suffix)} {json.dumps(whole)}")
    return 0


def print_type(topic, strict=False):
    print(topic_type(words(topic), strict=strict))
    return 0


def print_validate(intent, topic):
    res = validate(intent, topic)
    print('valid' if res else 'invalid')
    return 0 if res else 1


def print_match(topic, filter_topic):
    res = match(words(topic), words(filter_topic))
    print('true' if res else 'false')
    return 0 if res else 1


def route(schema_yaml, topic):
    """
    Print values of all schema topics which match the topic
    :param schema_yaml: the file descriptor of schema definition
    :param topic: published topic
    """
    logger = logging.getLogger('route')
    matcher = TopicMatcher(schema=yaml.safe_load(schema_yaml) or {},
                           skip_invalid=True)
    if not validate(PUBLISH, topic):
        logger.warning(f"The topic '{topic}' is not valid for publishing.")
    res = [val for vals in matcher.matches(topic) for val in vals]
    if not res:
        logger.info(f"The topic '{topic}' does not match any schema topic.")
        return 1
    print(yaml.dump(res, default_flow_style=False), end='')
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='topic-tubes',
        description='This tool can inspect and match topics')
    parser.add_argument('-v', '--verbose', help='Verbose.', action='store_true')
    subparsers = parser.add_subparsers(dest='command',
                                       help='sub-command help')
    subparsers.required = True
    # Words
    parser_words = subparsers.add_parser('words',
                                         help='Split topic to levels.')
    parser_words.add_argument('topic', help='Topic')
    parser_words.add_argument('--json', action='store_true',
                              help='Print levels as JSON list')
    parser_words.set_defaults(func=lambda args: print_words(args.topic,
                                                            args.json))
    # Triples
    parser_triples = subparsers.add_parser(
        'triples', help='Decompose topic to (prefix, suffix, whole).')
    parser_triples.add_argument('topic', help='Topic')
    parser_triples.set_defaults(func=lambda args: print_triples(args.topic))
    # Type
    parser_type = subparsers.add_parser('type',
                                        help='Direct or wildcard topic.')
    parser_type.add_argument('topic', help='Topic')
    parser_type.add_argument('--strict', action='store_true',
                             help="Any '#' level means wildcard")
    parser_type.set_defaults(func=lambda args: print_type(args.topic,
                                                          args.strict))
    # Validate
    parser_validate = subparsers.add_parser('validate',
                                            help='Validate topic.')
    parser_validate.add_argument('intent', choices=[SUBSCRIBE, PUBLISH],
                                 help='Validate as filter or topic')
    parser_validate.add_argument('topic', help='Topic')
    parser_validate.set_defaults(
        func=lambda args: print_validate(args.intent, args.topic)
    )
    # Match
    parser_match = subparsers.add_parser('match',
                                         help='Match topic against filter.')
    parser_match.add_argument('topic', help='Published topic')
    parser_match.add_argument('filter', help='Subscription filter')
    parser_match.set_defaults(func=lambda args: print_match(args.topic,
                                                            args.filter))
    # Route
    parser_route = subparsers.add_parser(
        'route', help='Find schema values for topic.')
    parser_route.add_argument('schema', type=argparse.FileType('r'),
                              help='The schema file')
    parser_route.add_argument('topic', help='Published topic')
    parser_route.set_defaults(func=lambda args: route(args.schema,
                                                      args.topic))

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
