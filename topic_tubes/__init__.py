from topic_tubes.topic import Topic, Triple, TopicException, TopicTypeError, \
    TopicIntentError, TopicNotValid, ROOT, MAX_LEN, SUBSCRIBE, PUBLISH, \
    DIRECT, WILDCARD, new_topic, node, words, topic_type, match, validate, \
    include_wildcard, triples
from topic_tubes.matcher import TopicMatcher
