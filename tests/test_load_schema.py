import logging

import pytest
import yaml

from topic_tubes import TopicMatcher, TopicNotValid


def test_load_schema_simple():

    schema = """
    topics:
      - topic: foo/#
        value: tube1
      - topic: +/bar
        value: tube2
    """

    matcher = TopicMatcher(schema=yaml.safe_load(schema))

    assert sorted(matcher.values()) == [['tube1'], ['tube2']]
    assert matcher.match('foo/aaa') == ['tube1']
    assert matcher.match('xxx/bar') == ['tube2']
    assert matcher.match('xxx/aaa') is None
    assert sorted(matcher.matches('foo/bar')) == [['tube1'], ['tube2']]


def test_load_schema_hierarchy():

    schema = """
    topics:
    - topic: foo/#
      value: tube1
    - topic: foo/test/#
      value: tube2
    - topic: foo/#
      value:
        name: tube3
        server: yes
    """

    matcher = TopicMatcher(schema=yaml.safe_load(schema))

    assert matcher.get_topic('foo/#') == [
        'tube1', {'name': 'tube3', 'server': True}
    ]
    assert matcher.matches('foo/aaa') == [matcher.get_topic('foo/#')]
    assert matcher.match('foo/test/aaa') == ['tube2']
    assert matcher.matches('foo/test/aaa') == [
        ['tube2'], matcher.get_topic('foo/#')
    ]
    assert matcher.filter('foo/test/#') == [('foo/test/#', ['tube2'])]
    assert len(matcher.filter('foo/#')) == 2


def test_load_schema_empty():

    schema = """
    topics:
    """

    matcher = TopicMatcher(schema=yaml.safe_load(schema))

    assert matcher.values() == []
    assert matcher.match('foo') is None


def test_load_schema_invalid():

    schema = """
    topics:
    - topic: foo/#/bar
      value: tube1
    """

    with pytest.raises(TopicNotValid):
        TopicMatcher(schema=yaml.safe_load(schema))


def test_load_schema_skip_invalid(caplog):

    schema = """
    topics:
    - topic: foo//bar
      value: tube1
    - value: tube2
    - topic: foo/bar
      value: tube3
    """

    with caplog.at_level(logging.WARNING):
        matcher = TopicMatcher(schema=yaml.safe_load(schema),
                               skip_invalid=True)

    assert matcher.values() == [['tube3']]
    assert len([r for r in caplog.records
                if r.name == 'TopicMatcher']) == 2
