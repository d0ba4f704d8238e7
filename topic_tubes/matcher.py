import logging

from topic_tubes.topic import SUBSCRIBE, SINGLE_LEVEL, MULTI_LEVEL, \
    TopicNotValid, TopicException, triples, validate, words, match


class TopicMatcher:

    class TopicNode(object):
        __slots__ = 'children', 'content', 'topic'

        def __init__(self, topic=None):
            self.children = {}
            self.content = None
            self.topic = topic

    def __init__(self, *, schema=None, skip_invalid=False):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._root = self.TopicNode()
        self.skip_invalid = skip_invalid
        if schema:
            self.parse_schema(schema)

    def _get_node(self, key, create=False):
        if not validate(SUBSCRIBE, key):
            raise TopicNotValid(f'The topic "{key}" is not valid filter.')
        node = self._root
        for _, suffix, whole in triples(key):
            child = node.children.get(suffix)
            if child is None:
                if not create:
                    return None
                child = node.children[suffix] = self.TopicNode(whole)
            node = child
        return node

    def set_topic(self, key, value):
        self._get_node(key, create=True).content = value
        self.logger.debug(f"The topic '{key}' was registered.")

    def get_topic(self, key, set_default=None):
        node = self._get_node(key)
        if node is None or node.content is None:
            if set_default is not None:
                self.set_topic(key, set_default)
            return set_default
        return node.content

    def parse_schema(self, schema):
        """
        parses topics from configuration
        topics:
          - topic: foo/#
            value: xxx
        """
        for info in schema.get('topics') or []:
            topic = info.get('topic')
            try:
                self.get_topic(topic, set_default=[]).append(info.get('value'))
            except TopicException as ex:
                if not self.skip_invalid:
                    raise
                self.logger.warning(
                    f"The topic '{topic}' from schema is skipped: {ex}")

    def filter(self, filter_topic: str):
        """
        Return registered topics by filter_topic
        :param filter_topic: str
        :return: [(str, object)]
        """
        filter_words = words(filter_topic)
        return [(node.topic, node.content) for node in self._nodes()
                if match(words(node.topic), filter_words)]

    def matches(self, topic):
        """
        Return values of all registered filters, which match the topic.
        """
        lst = words(topic)
        lst_len = len(lst)
        res = {}
        stack = [(self._root, 0, False)]
        while stack:
            node, i, children_done = stack.pop()
            if children_done:
                # '#' is reported after the deeper filters
                hash_node = node.children[MULTI_LEVEL]
                # a literal '#' level is consumed as a plain word first
                if i >= lst_len - 1 or lst[i] != MULTI_LEVEL:
                    res.setdefault(hash_node.topic, hash_node.content)
                continue
            hash_node = node.children.get(MULTI_LEVEL)
            if hash_node is not None and hash_node.content is not None:
                stack.append((node, i, True))
            if i == lst_len:
                if node.content is not None:
                    res.setdefault(node.topic, node.content)
            else:
                part = lst[i]
                if part != SINGLE_LEVEL and SINGLE_LEVEL in node.children:
                    stack.append((node.children[SINGLE_LEVEL], i + 1, False))
                if part in node.children:
                    stack.append((node.children[part], i + 1, False))
        return list(res.values())

    def match(self, topic, default=None):
        res = self.matches(topic)
        if res:
            return res[0]
        return default

    def _nodes(self):
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.content is not None:
                yield node
            stack.extend(reversed(list(node.children.values())))

    def values(self) -> list:
        _values = []
        for node in self._nodes():
            if node.content not in _values:
                _values.append(node.content)
        return _values
