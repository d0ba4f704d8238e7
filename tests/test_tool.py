import io
import json

import pytest
import yaml

from topic_tubes.tool import main, route

SCHEMA = """
topics:
  - topic: sensors/#
    value: archive
  - topic: sensors/+/temp
    value: thermo
  - topic: bad//topic
    value: lost
"""


@pytest.mark.parametrize("argv,code,out", [
    (['words', '/a/b'], 0, '\na\nb\n'),
    (['type', 'a/+'], 0, 'wildcard\n'),
    (['type', 'a/#/b'], 0, 'direct\n'),
    (['type', '--strict', 'a/#/b'], 0, 'wildcard\n'),
    (['validate', 'subscribe', 'a/#'], 0, 'valid\n'),
    (['validate', 'publish', 'a/#'], 1, 'invalid\n'),
    (['match', 'a/b/c', 'a/+/#'], 0, 'true\n'),
    (['match', 'a/b/c', 'a/+'], 1, 'false\n'),
])
def test_commands(capsys, argv, code, out):
    assert main(argv) == code
    assert capsys.readouterr().out == out


def test_words_json(capsys):
    assert main(['words', '--json', 'a//b']) == 0
    assert json.loads(capsys.readouterr().out) == ['a', '', 'b']


def test_triples(capsys):
    assert main(['triples', 'a/b']) == 0
    assert capsys.readouterr().out.splitlines() == [
        'ROOT "a" "a"',
        '"a" "b" "a/b"',
    ]


def test_unknown_intent():
    with pytest.raises(SystemExit):
        main(['validate', 'unsubscribe', 'a'])


def test_route(capsys):
    assert route(io.StringIO(SCHEMA), 'sensors/kitchen/temp') == 0
    assert sorted(yaml.safe_load(capsys.readouterr().out)) == \
        ['archive', 'thermo']


def test_route_no_match(capsys):
    assert route(io.StringIO(SCHEMA), 'bad/topic') == 1
    assert capsys.readouterr().out == ''


def test_route_file(tmp_path, capsys):
    schema_file = tmp_path / 'schema.yaml'
    schema_file.write_text(SCHEMA)
    assert main(['route', str(schema_file), 'sensors/door']) == 0
    assert yaml.safe_load(capsys.readouterr().out) == ['archive']
