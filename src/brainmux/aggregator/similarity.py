"""文本相似与矛盾判定

两者都是廉价的词面启发式，不做语义蕴含判断。
"""

DEFAULT_SIMILARITY_THRESHOLD = 0.6

CONTRADICTION_PAIRS: tuple[tuple[str, str], ...] = (
    ("yes", "no"),
    ("always", "never"),
    ("must", "must not"),
)
"""(a 中出现, b 中出现) 即判定矛盾"""


def _word_set(text: str) -> set[str]:
    return set(text.lower().split())


def jaccard_similarity(a: str | None, b: str | None) -> float:
    """按空白切分、小写后的词集合 Jaccard 相似度

    任一为 None 或并集为空时返回 0.0。
    """
    if a is None or b is None:
        return 0.0
    words_a = _word_set(a)
    words_b = _word_set(b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def is_similar(
    a: str | None,
    b: str | None,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> bool:
    """相似度严格大于阈值即视为重复内容"""
    return jaccard_similarity(a, b) > threshold


def is_conflicting(a: str | None, b: str | None) -> bool:
    """大小写不敏感的子串矛盾检测（有方向：a 为肯定方，b 为否定方）"""
    if not a or not b:
        return False
    lower_a = a.lower()
    lower_b = b.lower()
    return any(
        positive in lower_a and negative in lower_b
        for positive, negative in CONTRADICTION_PAIRS
    )
