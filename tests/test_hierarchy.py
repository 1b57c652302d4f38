import pytest

from src.ahp.engine import compute_priorities
from src.ahp.errors import StructuralError, ValidationError
from src.ahp.matrix import PairwiseMatrix, ReciprocalMatrixBuilder
from src.ranking.hierarchy import HierarchyModel


def make_model():
    model = HierarchyModel(
        3, 3,
        criteria_labels=["Cost", "Quality", "Service"],
        alternative_labels=["X", "Y", "Z"]
    )
    model.criteria.set_judgments({(0, 1): "3", (0, 2): "5", (1, 2): "2"})
    model.alternatives_for(0).set_judgments({(0, 1): "1/2", (0, 2): "3", (1, 2): "5"})
    model.alternatives_for(1).set_judgments({(0, 1): "4", (0, 2): "2", (1, 2): "1/2"})
    model.alternatives_for(2).set_judgments({(0, 1): "1/3", (0, 2): "2", (1, 2): "5"})
    return model


def test_model_structure():
    model = make_model()
    assert model.criteria_labels == ["Cost", "Quality", "Service"]
    assert model.alternative_labels == ["X", "Y", "Z"]
    assert len(model.alternatives) == 3
    assert model.alternatives_for(1).matrix.name == "alternatives[Quality]"


def test_evaluate_matches_manual_aggregation():
    model = make_model()
    result = model.evaluate()

    criteria = compute_priorities(model.criteria.matrix).priority_vector
    expected = sum(
        criteria[i] * compute_priorities(model.alternatives_for(i).matrix).priority_vector
        for i in range(3)
    )
    assert result.ranking.composite.tolist() == pytest.approx(expected.tolist())
    assert result.ranking.composite.sum() == pytest.approx(1.0)
    weights = [e.weight for e in result.ranking.entries]
    assert weights == sorted(weights, reverse=True)
    assert set(result.ranking.labels) == {"X", "Y", "Z"}


def test_result_to_dict():
    result = make_model().evaluate()
    data = result.to_dict()
    assert list(data["alternatives"]) == ["Cost", "Quality", "Service"]
    assert [r["rank"] for r in data["ranking"]] == [1, 2, 3]
    assert isinstance(result.consistent, bool)


def test_default_model_ties_in_original_order():
    result = HierarchyModel(2, 3).evaluate()
    assert result.ranking.labels == ["A1", "A2", "A3"]
    assert [e.weight for e in result.ranking.entries] == pytest.approx([1 / 3] * 3)


def test_invalid_criteria_reported_first():
    model = make_model()
    model.criteria.set_upper(0, 1, "")
    model.alternatives_for(0).set_upper(0, 1, "bad")
    with pytest.raises(ValidationError) as exc_info:
        model.evaluate()
    assert {e.matrix for e in exc_info.value.errors} == {"criteria"}


def test_alternative_errors_collected_across_matrices():
    model = make_model()
    model.alternatives_for(0).set_upper(0, 1, "bad")
    model.alternatives_for(2).set_upper(1, 2, "0")
    with pytest.raises(ValidationError) as exc_info:
        model.evaluate()
    names = {e.matrix for e in exc_info.value.errors}
    assert names == {"alternatives[Cost]", "alternatives[Service]"}


def test_size_mismatch_aborts():
    criteria = PairwiseMatrix(2, name="criteria")
    alternatives = [PairwiseMatrix(3), PairwiseMatrix(2)]
    model = HierarchyModel.from_matrices(criteria, alternatives, alternative_count=3)
    with pytest.raises(StructuralError) as exc_info:
        model.evaluate()
    assert len(exc_info.value.problems) == 1


def test_missing_matrix_aborts():
    criteria = PairwiseMatrix(3, name="criteria")
    model = HierarchyModel.from_matrices(criteria, [PairwiseMatrix(2)], alternative_count=2)
    with pytest.raises(StructuralError) as exc_info:
        model.evaluate()
    assert len(exc_info.value.problems) == 2


def test_hierarchical_size_cap():
    with pytest.raises(StructuralError):
        HierarchyModel(13, 3)


def test_extra_alternative_matrix_aborts():
    model = make_model()
    model.alternatives.append(ReciprocalMatrixBuilder(3))
    with pytest.raises(StructuralError) as exc_info:
        model.evaluate()
    assert "4" in str(exc_info.value)


def test_from_matrices_wraps_given_matrices():
    criteria = PairwiseMatrix(2, name="criteria")
    alternatives = [PairwiseMatrix(3, label_prefix="A"), PairwiseMatrix(3, label_prefix="A")]
    model = HierarchyModel.from_matrices(criteria, alternatives)
    assert model.criteria.matrix is criteria
    assert [b.matrix for b in model.alternatives] == alternatives
    assert model.alternative_count == 3
    assert model.evaluate().ranking.labels == ["A1", "A2", "A3"]


def test_prebuilt_builders_are_kept():
    criteria = ReciprocalMatrixBuilder(2, name="criteria")
    alternatives = [ReciprocalMatrixBuilder(3, label_prefix="A") for _ in range(2)]
    model = HierarchyModel(2, 3, criteria=criteria, alternatives=alternatives)
    assert model.criteria is criteria
    assert model.alternatives == alternatives
