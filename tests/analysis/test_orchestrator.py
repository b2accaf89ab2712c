from io import BytesIO

import numpy as np
import pytest
from PIL import Image
from returns.pipeline import is_successful
from returns.result import Failure

from analysis import (
    NormalizationParams,
    PipelineConfig,
    PipelineVariant,
    analyze_grid,
    validate_grid,
)
from container_models import Grid
from exceptions import InputError, ProcessingError
from mutations import MatrixMutation
from renders import decode_data_url
from utils.constants import StageName


def _pixels(data_url: str) -> np.ndarray:
    with Image.open(BytesIO(decode_data_url(data_url))) as image:
        return np.asarray(image)


class TestValidateGrid:
    def test_builds_float32_matrix(self, ramp_grid: Grid) -> None:
        matrix = validate_grid(ramp_grid).unwrap()
        assert matrix.data.dtype == np.float32
        assert (matrix.height, matrix.width) == (3, 3)

    @pytest.mark.parametrize(
        ("grid", "message"),
        [
            pytest.param([], "no rows", id="no_rows"),
            pytest.param([[]], "no values", id="empty_first_row"),
            pytest.param([[1.0, 2.0], [3.0]], "row 1 has 1 value", id="short_row"),
            pytest.param([[1.0], [2.0, 3.0]], "row 1 has 2 value", id="long_row"),
        ],
    )
    def test_rejects_malformed_grid(self, grid: Grid, message: str) -> None:
        # Act
        result = validate_grid(grid)
        # Assert
        assert isinstance(result.failure(), InputError)
        assert message in result.failure().message

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(float("nan"), id="nan"),
            pytest.param(float("inf"), id="positive_infinity"),
            pytest.param(float("-inf"), id="negative_infinity"),
            pytest.param(1e39, id="float32_overflow"),
        ],
    )
    def test_rejects_non_finite_values(self, value: float) -> None:
        # Act
        result = validate_grid([[1.0, 2.0], [3.0, value]])
        # Assert
        assert isinstance(result.failure(), InputError)
        assert "row 1, column 1" in result.failure().message


@pytest.mark.integration
class TestAnalyzeGrid:
    @pytest.mark.parametrize(
        ("variant", "expected_stages"),
        [
            pytest.param(PipelineVariant.PREVIEW, ["Normalized", "Gaussian"], id="preview"),
            pytest.param(
                PipelineVariant.SEGMENTATION, ["Normalized", "Gaussian", "Threshold"], id="segmentation"
            ),
            pytest.param(
                PipelineVariant.SEGMENTATION_INVERTED,
                ["Normalized", "Gaussian", "Threshold", "Inverted"],
                id="segmentation_inverted",
            ),
            pytest.param("segmentation", ["Normalized", "Gaussian", "Threshold"], id="variant_name"),
        ],
    )
    def test_renders_observable_stages_in_order(
        self, ramp_grid: Grid, variant: PipelineVariant | str, expected_stages: list[str]
    ) -> None:
        # Act
        images = analyze_grid(ramp_grid, variant).unwrap()
        # Assert
        assert list(images) == expected_stages
        assert all(url.startswith("data:image/png;base64,") for url in images.values())

    def test_preview_is_the_default(self, ramp_grid: Grid) -> None:
        assert list(analyze_grid(ramp_grid).unwrap()) == ["Normalized", "Gaussian"]

    def test_preview_normalized_stage_spans_full_gray_range(self, ramp_grid: Grid) -> None:
        # Act
        images = analyze_grid(ramp_grid).unwrap()
        # Assert
        pixels = _pixels(images[StageName.NORMALIZED])
        assert pixels.shape == (3, 3)
        assert (pixels.min(), pixels[1, 1], pixels.max()) == (0, 128, 255)

    def test_constant_grid_renders_black(self) -> None:
        images = analyze_grid([[5.0, 5.0], [5.0, 5.0]]).unwrap()
        assert np.all(_pixels(images[StageName.NORMALIZED]) == 0)
        assert np.all(_pixels(images[StageName.GAUSSIAN]) == 0)

    def test_segmentation_separates_bimodal_grid(self, bimodal_grid: Grid) -> None:
        # Act
        images = analyze_grid(bimodal_grid, PipelineVariant.SEGMENTATION_INVERTED).unwrap()
        # Assert
        threshold = _pixels(images[StageName.THRESHOLD])
        inverted = _pixels(images[StageName.INVERTED])
        assert np.all(threshold[:, :3] == 0)
        assert np.all(threshold[:, 5:] == 255)
        np.testing.assert_array_equal(inverted, 255 - threshold.astype(int))

    @pytest.mark.parametrize(
        "grid",
        [
            pytest.param([], id="empty"),
            pytest.param([[1.0, 2.0], [3.0]], id="ragged"),
        ],
    )
    def test_malformed_grid_fails_before_any_stage_runs(
        self, grid: Grid, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Arrange
        calls: list[MatrixMutation] = []
        original_call = MatrixMutation.__call__
        monkeypatch.setattr(
            MatrixMutation,
            "__call__",
            lambda mutation, matrix: calls.append(mutation) or original_call(mutation, matrix),
        )
        # Act
        result = analyze_grid(grid, PipelineVariant.SEGMENTATION)
        # Assert
        assert isinstance(result.failure(), InputError)
        assert calls == []

    def test_first_failure_short_circuits(
        self, ramp_grid: Grid, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Arrange
        error = ProcessingError("blur failed")
        calls: list[str] = []

        def failing_blur(_mutation, _matrix):
            calls.append("blur")
            return Failure(error)

        monkeypatch.setattr("mutations.filter.GaussianBlur.__call__", failing_blur)
        monkeypatch.setattr(
            "mutations.threshold.OtsuThreshold.apply_on_matrix",
            lambda *_: calls.append("threshold"),
        )
        # Act
        result = analyze_grid(ramp_grid, PipelineVariant.SEGMENTATION)
        # Assert
        assert result.failure() is error
        assert calls == ["blur"]

    def test_unknown_variant_fails(self, ramp_grid: Grid) -> None:
        assert not is_successful(analyze_grid(ramp_grid, "sharpen"))

    def test_custom_config(self, ramp_grid: Grid) -> None:
        # Arrange
        config = PipelineConfig(observable=frozenset({StageName.GAUSSIAN}))
        # Act
        images = analyze_grid(ramp_grid, config).unwrap()
        # Assert
        assert list(images) == ["Gaussian"]


class TestPipelineConfig:
    @pytest.mark.parametrize(
        "kwargs",
        [
            pytest.param({"threshold": True}, id="threshold_without_uint8"),
            pytest.param(
                {"normalization": NormalizationParams(value_range={"lower": 0, "upper": 255}, as_uint8=True), "invert": True},
                id="invert_without_threshold",
            ),
            pytest.param({"observable": frozenset({StageName.THRESHOLD})}, id="unreachable_observable"),
            pytest.param({"smoothing": {"kernel_size": 4}}, id="even_kernel"),
        ],
    )
    def test_rejects_incompatible_stages(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            PipelineConfig(**kwargs)
