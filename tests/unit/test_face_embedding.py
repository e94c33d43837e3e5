"""
Unit tests for sherlock.utils.face_embedding
"""
import pytest
from sherlock.utils.face_embedding import cosine_similarity, find_nearest, normalize_embedding


class TestNormalizeEmbedding:
    def test_short_vector_zero_padded(self):
        result = normalize_embedding([1, 2, 3], 6)
        assert result == [1.0, 2.0, 3.0, 0.0, 0.0, 0.0]

    def test_long_vector_truncated(self):
        result = normalize_embedding(list(range(10)), 4)
        assert result == [0.0, 1.0, 2.0, 3.0]

    def test_exact_length_unchanged(self):
        assert normalize_embedding([0.5, 0.25], 2) == [0.5, 0.25]


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)

    def test_zero_vector_is_zero(self):
        assert cosine_similarity([0, 0], [1, 1]) == 0.0

    def test_length_mismatch_is_zero(self):
        assert cosine_similarity([1, 0, 0], [1, 0]) == 0.0


class TestFindNearest:
    def test_empty_candidates(self):
        assert find_nearest([1.0, 0.0], []) is None

    def test_picks_closest(self):
        candidates = [("a", [0.0, 1.0]), ("b", [0.9, 0.1]), ("c", [-1.0, 0.0])]
        key, similarity = find_nearest([1.0, 0.0], candidates)
        assert key == "b"
        assert 0.9 < similarity < 1.0

    def test_exact_match_is_one(self):
        key, similarity = find_nearest([0.3, 0.4], [("x", [0.3, 0.4])])
        assert key == "x"
        assert similarity == pytest.approx(1.0)

    def test_negative_similarity_clamped_to_zero(self):
        key, similarity = find_nearest([1.0, 0.0], [("opposite", [-1.0, 0.0])])
        assert key == "opposite"
        assert similarity == 0.0

    def test_skips_mismatched_and_zero_candidates(self):
        candidates = [("short", [1.0]), ("zero", [0.0, 0.0]), ("ok", [1.0, 1.0])]
        key, _ = find_nearest([1.0, 0.0], candidates)
        assert key == "ok"

    def test_zero_query_returns_none(self):
        assert find_nearest([0.0, 0.0], [("a", [1.0, 0.0])]) is None
