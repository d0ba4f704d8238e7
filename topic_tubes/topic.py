"""
Topic semantics and usage

A topic must be at least one character long.
Topic names are case sensitive: ACCOUNTS and Accounts are two different topics.
Topic names can include the space character: 'Accounts payable' is valid.
A leading '/' creates a distinct topic: '/finance' is different from
'finance'. '/finance' matches '+/+' and '/+', but not '+'.
Do not include the null character (Unicode \\x0000) in any topic.
The length is limited to 64k, within that there are no limits to the
number of levels in a topic tree.
"""
import os
import socket
from collections import namedtuple


class TopicException(Exception): pass                       # flake8: E701
class TopicTypeError(TopicException, TypeError): pass       # flake8: E701
class TopicIntentError(TopicException, ValueError): pass    # flake8: E701
class TopicNotValid(TopicException): pass                   # flake8: E701


MAX_LEN = 64 * 1024

SEPARATOR = '/'
SINGLE_LEVEL = '+'
MULTI_LEVEL = '#'

SUBSCRIBE = 'subscribe'
PUBLISH = 'publish'

DIRECT = 'direct'
WILDCARD = 'wildcard'


class _Root:
    __slots__ = ()

    def __repr__(self):
        return 'ROOT'


ROOT = _Root()

Triple = namedtuple('Triple', ['prefix', 'suffix', 'whole'])


_NODE = object()


def node() -> str:
    """
    returns the identity of this process, used as default topic origin
    """
    return f"{os.getpid()}@{socket.gethostname()}"


def _check_str(topic):
    if not isinstance(topic, str):
        raise TopicTypeError(
            f"The topic has to be a string, not {type(topic).__name__}.")


def _check_words(lst, what='words'):
    if isinstance(lst, (str, bytes, bytearray)):
        raise TopicTypeError(
            f"The {what} have to be a sequence of words, not a string. "
            f"Use words() first.")
    try:
        lst = list(lst)
    except TypeError as ex:
        raise TopicTypeError(
            f"The {what} have to be a sequence of words.") from ex
    for word in lst:
        if not isinstance(word, str):
            raise TopicTypeError(
                f"The {what} have to contain only strings, "
                f"not {type(word).__name__}.")
    return lst


class Topic:
    __slots__ = '_name', '_origin'

    def __init__(self, name: str, origin=_NODE):
        """
        Constructor Topic
        :param name:str     topic name or filter
        :param origin:      opaque identity of the creator (default node())
        """
        _check_str(name)
        self._name = name
        self._origin = node() if origin is _NODE else origin

    @property
    def name(self) -> str:
        return self._name

    @property
    def origin(self):
        return self._origin

    @property
    def words(self) -> [str]:
        return words(self._name)

    @property
    def type(self) -> str:
        return topic_type(self)

    def __repr__(self):
        return f"Topic(name={self._name!r}, origin={self._origin!r})"

    def __str__(self):
        return self._name

    def __eq__(self, other):
        if not isinstance(other, Topic):
            return NotImplemented
        return (self._name, self._origin) == (other._name, other._origin)

    def __hash__(self):
        return hash((self._name, self._origin))


def new_topic(name: str, origin=_NODE) -> Topic:
    return Topic(name, origin)


def words(topic: str) -> [str]:
    """
    Split topic to the list of levels.
    '/'.join(words(topic)) == topic
    """
    _check_str(topic)
    return topic.split(SEPARATOR)


def topic_type(topic, strict=False) -> str:
    """
    Returns DIRECT or WILDCARD.
    :param topic: Topic or list of words
    :param strict: bool - '#' on any position means WILDCARD, otherwise
                   only the terminal '#' is recognized
    """
    if isinstance(topic, Topic):
        lst = topic.words
    else:
        lst = _check_words(topic)
    last = len(lst) - 1
    for i, word in enumerate(lst):
        if word == SINGLE_LEVEL:
            return WILDCARD
        if word == MULTI_LEVEL and (strict or i == last):
            return WILDCARD
    return DIRECT


def match(topic_words, filter_words) -> bool:
    """
    Match words of a topic against words of a filter.
    '+' matches exactly one level (also an empty one),
    '#' as the rest of filter matches all remaining levels (also none).
    """
    topic_words = _check_words(topic_words, 'topic words')
    filter_words = _check_words(filter_words, 'filter words')
    t_len = len(topic_words)
    f_len = len(filter_words)
    i = 0
    while True:
        if i == t_len and i == f_len:
            return True
        if i < t_len and i < f_len:
            if topic_words[i] == filter_words[i]:
                i += 1
                continue
            if filter_words[i] == SINGLE_LEVEL:
                i += 1
                continue
        if f_len - i == 1 and filter_words[i] == MULTI_LEVEL:
            return True
        return False


def include_wildcard(lst) -> bool:
    lst = _check_words(lst)
    return SINGLE_LEVEL in lst or MULTI_LEVEL in lst


def _valid(lst) -> bool:
    start = 1 if lst and lst[0] == '' else 0
    last = len(lst) - 1
    for i in range(start, len(lst)):
        if lst[i] == '':
            return False
        if lst[i] == MULTI_LEVEL and i != last:
            return False
    return True


def validate(intent: str, topic: str) -> bool:
    """
    Validate topic for subscribing (filter) or publishing.
    :param intent: SUBSCRIBE or PUBLISH
    :param topic: str
    :return: bool
    """
    if intent not in (SUBSCRIBE, PUBLISH):
        raise TopicIntentError(f"The intent '{intent}' is not supported.")
    _check_str(topic)
    if not topic:
        return False
    if len(topic.encode('utf8')) > MAX_LEN:
        return False
    lst = words(topic)
    if intent == SUBSCRIBE:
        return _valid(lst)
    return _valid(lst) and not include_wildcard(lst)


def triples(topic: str) -> [Triple]:
    """
    Decompose the topic to triples (prefix, suffix, whole) from root to leaf.
    triples('a/b') == [(ROOT, 'a', 'a'), ('a', 'b', 'a/b')]
    """
    _check_str(topic)
    res = []
    whole = topic
    while True:
        pos = whole.rfind(SEPARATOR)
        if pos < 0:
            res.append(Triple(ROOT, whole, whole))
            break
        prefix = whole[:pos]
        res.append(Triple(prefix, whole[pos + 1:], whole))
        whole = prefix
    res.reverse()
    return res
