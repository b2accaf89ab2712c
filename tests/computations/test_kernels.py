import numpy as np
import pytest

from computations import create_gaussian_kernel_1d, sigma_from_kernel_size


@pytest.mark.parametrize(
    ("kernel_size", "expected"),
    [
        pytest.param(3, 0.8, id="3x3"),
        pytest.param(5, 1.1, id="5x5"),
        pytest.param(7, 1.4, id="7x7"),
    ],
)
def test_sigma_from_kernel_size(kernel_size: int, expected: float) -> None:
    assert sigma_from_kernel_size(kernel_size) == pytest.approx(expected)


class TestCreateGaussianKernel1D:
    @pytest.mark.parametrize("kernel_size", [1, 3, 5, 9])
    def test_kernel_is_normalized_and_symmetric(self, kernel_size: int) -> None:
        # Act
        kernel = create_gaussian_kernel_1d(kernel_size, sigma=1.0)
        # Assert
        assert kernel.shape == (kernel_size,)
        assert np.sum(kernel) == pytest.approx(1.0)
        np.testing.assert_allclose(kernel, kernel[::-1])

    def test_peak_is_in_the_centre(self) -> None:
        kernel = create_gaussian_kernel_1d(5, sigma=1.0)
        assert np.argmax(kernel) == 2  # noqa

    def test_values_follow_the_gaussian(self) -> None:
        # Arrange
        expected = np.exp(-np.array([1.0, 0.0, 1.0]) / 2)
        expected /= expected.sum()
        # Act
        kernel = create_gaussian_kernel_1d(3, sigma=1.0)
        # Assert
        np.testing.assert_allclose(kernel, expected)

    @pytest.mark.parametrize(
        ("kernel_size", "expected"),
        [
            pytest.param(1, [1.0], id="1"),
            pytest.param(3, [0.25, 0.5, 0.25], id="3"),
            pytest.param(5, [0.0625, 0.25, 0.375, 0.25, 0.0625], id="5"),
            pytest.param(
                7,
                [0.03125, 0.109375, 0.21875, 0.28125, 0.21875, 0.109375, 0.03125],
                id="7",
            ),
        ],
    )
    def test_small_kernels_without_sigma_use_binomial_weights(
        self, kernel_size: int, expected: list[float]
    ) -> None:
        np.testing.assert_array_equal(create_gaussian_kernel_1d(kernel_size, sigma=0.0), expected)

    @pytest.mark.parametrize("sigma", [0.0, -1.0])
    def test_large_kernels_without_sigma_derive_it_from_kernel_size(self, sigma: float) -> None:
        np.testing.assert_allclose(
            create_gaussian_kernel_1d(9, sigma=sigma),
            create_gaussian_kernel_1d(9, sigma=sigma_from_kernel_size(9)),
        )

    @pytest.mark.parametrize("kernel_size", [0, -3, 2, 4])
    def test_rejects_invalid_kernel_size(self, kernel_size: int) -> None:
        with pytest.raises(ValueError, match="positive odd integer"):
            create_gaussian_kernel_1d(kernel_size, sigma=1.0)
