import unittest

import numpy as np

from dualfraction import (
    ApproximateValue,
    ExactValue,
    FractionMatrix,
    IndexOutOfRange,
    NonRepresentable,
    ShapeMismatch,
    SingularMatrixError,
)


def exact_matrix(rows):
    return FractionMatrix(rows, fraction_type=ExactValue)


def approximate_matrix(rows):
    return FractionMatrix(rows, fraction_type=ApproximateValue)


class FractionMatrixConstructionTests(unittest.TestCase):
    def test_shape_and_access(self):
        matrix = exact_matrix([[1, 2, 3], [4, 5, 6]])
        self.assertEqual(matrix.shape, (2, 3))
        self.assertEqual(matrix.number_of_rows, 2)
        self.assertEqual(matrix.number_of_columns, 3)
        self.assertEqual(matrix[1, 2], ExactValue(6))
        self.assertEqual(matrix.get(0, 1), ExactValue(2))
        self.assertEqual(matrix.row(1), [ExactValue(4), ExactValue(5), ExactValue(6)])
        self.assertEqual(matrix.column(0), [ExactValue(1), ExactValue(4)])

    def test_set_entry(self):
        matrix = FractionMatrix.zeros(2, 2, fraction_type=ExactValue)
        matrix[0, 1] = ExactValue(3, 4)
        matrix.set(1, 0, ExactValue(-1))
        self.assertEqual(matrix, exact_matrix([[0, ExactValue(3, 4)], [-1, 0]]))

    def test_ragged_rows_are_rejected(self):
        with self.assertRaises(ShapeMismatch):
            FractionMatrix([[1, 2], [3]])
        with self.assertRaises(ShapeMismatch):
            FractionMatrix(np.zeros(3))

    def test_out_of_range_access(self):
        matrix = exact_matrix([[1, 2], [3, 4]])
        for key in [(2, 0), (0, 2), (-1, 0)]:
            with self.subTest(key=key):
                with self.assertRaises(IndexOutOfRange):
                    matrix[key]
        with self.assertRaises(IndexError):
            matrix.set(5, 5, 1)
        with self.assertRaises(IndexOutOfRange) as ctx:
            matrix.row(3)
        self.assertEqual(ctx.exception.shape, (2, 2))
        with self.assertRaises(TypeError):
            matrix[0]

    def test_empty_and_zero_sized(self):
        self.assertEqual(FractionMatrix([]).shape, (0, 0))
        self.assertEqual(FractionMatrix.zeros(0, 3).shape, (0, 3))
        self.assertEqual(FractionMatrix.identity(0).shape, (0, 0))

    def test_exact_matrix_from_decimal_floats(self):
        matrix = FractionMatrix([[0.123456789, 1.0], [1e-7, 0.5]], fraction_type=ExactValue)
        self.assertTrue(matrix.is_exact())
        self.assertEqual(matrix[0, 0], ExactValue(123456789, 10**9))
        self.assertEqual(matrix[1, 0], ExactValue(1, 10**7))
        self.assertEqual(matrix.row(0)[0].denominator, 10**9)

    def test_from_numpy(self):
        matrix = FractionMatrix(np.array([[0.5, 0.25], [1.0, 2.0]]), fraction_type=ApproximateValue)
        self.assertFalse(matrix.is_exact())
        np.testing.assert_allclose(matrix.to_numpy(), [[0.5, 0.25], [1.0, 2.0]])

    def test_copy_is_independent(self):
        matrix = exact_matrix([[1, 2], [3, 4]])
        copy = FractionMatrix(matrix)
        copy[0, 0] = ExactValue(9)
        self.assertEqual(matrix[0, 0], ExactValue(1))


class FractionMatrixArithmeticTests(unittest.TestCase):
    def test_multiply(self):
        left = exact_matrix([[1, 2], [3, 4]])
        right = exact_matrix([[5, 6], [7, 8]])
        self.assertEqual(left @ right, exact_matrix([[19, 22], [43, 50]]))
        self.assertEqual(left.multiply(right), left @ right)
        self.assertTrue((left @ right).is_exact())

    def test_multiply_shape_mismatch(self):
        left = exact_matrix([[1, 2, 3], [4, 5, 6]])
        right = exact_matrix([[1, 2], [3, 4]])
        with self.assertRaises(ShapeMismatch):
            left @ right
        self.assertEqual((right @ left).shape, (2, 3))

    def test_identity_is_neutral(self):
        matrix = exact_matrix([[ExactValue(1, 2), ExactValue(1, 3)], [ExactValue(-2), ExactValue(7, 5)]])
        identity = FractionMatrix.identity(2, fraction_type=ExactValue)
        self.assertEqual(identity @ matrix, matrix)
        self.assertEqual(matrix @ identity, matrix)

    def test_scalar_and_element_wise(self):
        matrix = exact_matrix([[1, 2], [3, 4]])
        half = matrix * ExactValue(1, 2)
        self.assertEqual(half, exact_matrix([[ExactValue(1, 2), 1], [ExactValue(3, 2), 2]]))
        self.assertEqual(2 * half, matrix)
        self.assertEqual(ExactValue(2) * half, matrix)
        self.assertEqual(matrix + matrix, matrix.scale(2))
        self.assertEqual(matrix - matrix, FractionMatrix.zeros(2, 2, fraction_type=ExactValue))
        self.assertEqual(-matrix, matrix.scale(-1))
        with self.assertRaises(ShapeMismatch):
            matrix + exact_matrix([[1, 2]])

    def test_transpose(self):
        matrix = exact_matrix([[1, 2, 3], [4, 5, 6]])
        transposed = matrix.transpose()
        self.assertEqual(transposed.shape, (3, 2))
        self.assertEqual(transposed.row(2), [ExactValue(3), ExactValue(6)])
        self.assertEqual(matrix.T, transposed)

    def test_vector_products(self):
        matrix = exact_matrix([[1, 2], [3, 4]])
        self.assertEqual(matrix @ [1, 1], [ExactValue(3), ExactValue(7)])
        self.assertEqual([1, 1] @ matrix, [ExactValue(4), ExactValue(6)])
        self.assertEqual(matrix.multiply_vector([ExactValue(1, 2), 0]), [ExactValue(1, 2), ExactValue(3, 2)])
        with self.assertRaises(ShapeMismatch):
            matrix.multiply_vector([1, 2, 3])

    def test_empty_inner_dimension_keeps_entry_type(self):
        left = FractionMatrix.zeros(2, 0, fraction_type=ApproximateValue)
        right = FractionMatrix.zeros(0, 2, fraction_type=ApproximateValue)
        product = left @ right
        self.assertEqual(product.shape, (2, 2))
        self.assertFalse(product.is_exact())
        self.assertTrue(all(isinstance(entry, ApproximateValue) for row in product.to_list() for entry in row))
        self.assertTrue(all(entry.is_zero() for row in product.to_list() for entry in row))

        exact = FractionMatrix.zeros(2, 0, fraction_type=ExactValue) @ FractionMatrix.zeros(
            0, 3, fraction_type=ExactValue
        )
        self.assertTrue(all(isinstance(entry, ExactValue) for row in exact.to_list() for entry in row))

        mixed = FractionMatrix.zeros(1, 0, fraction_type=ExactValue) @ right
        self.assertTrue(all(isinstance(entry, ApproximateValue) for entry in mixed.row(0)))

    def test_empty_vector_products_keep_entry_type(self):
        matrix = FractionMatrix.zeros(2, 0, fraction_type=ApproximateValue)
        result = matrix @ []
        self.assertEqual(len(result), 2)
        self.assertTrue(all(isinstance(entry, ApproximateValue) for entry in result))
        transposed = [] @ matrix.T
        self.assertTrue(all(isinstance(entry, ApproximateValue) for entry in transposed))

    def test_derived_empty_matrices_keep_entry_type(self):
        tall = FractionMatrix(np.empty((3, 0)), fraction_type=ApproximateValue)
        gram = tall @ tall.T
        self.assertEqual(gram.shape, (3, 3))
        self.assertTrue(all(isinstance(entry, ApproximateValue) for row in gram.to_list() for entry in row))
        demoted = FractionMatrix.zeros(2, 0, fraction_type=ExactValue).to_approximate()
        product = demoted @ FractionMatrix.zeros(0, 1, fraction_type=ExactValue)
        self.assertIsInstance(product[0, 0], ApproximateValue)

    def test_mixed_entries_demote(self):
        exact = exact_matrix([[1, 2], [3, 4]])
        approximate = approximate_matrix([[1, 0], [0, 1]])
        product = exact @ approximate
        self.assertFalse(product.is_exact())
        self.assertEqual(product, exact)

    def test_exact_and_approximate_products_agree(self):
        rows = [[ExactValue(1, 2), ExactValue(1, 3)], [ExactValue(1, 4), ExactValue(1, 5)]]
        exact = exact_matrix(rows)
        approximate = exact.to_approximate()
        exact_product = exact @ exact
        approximate_product = approximate @ approximate
        self.assertTrue(exact_product.is_exact())
        self.assertFalse(approximate_product.is_exact())
        self.assertEqual(exact_product, approximate_product)
        np.testing.assert_allclose(exact_product.to_numpy(), approximate_product.to_numpy(), atol=1e-13)

    def test_equality_is_tolerant(self):
        left = approximate_matrix([[0.1, 0.2]])
        self.assertEqual(left, approximate_matrix([[0.1 + 1e-14, 0.2]]))
        self.assertNotEqual(left, approximate_matrix([[0.1 + 1e-12, 0.2]]))
        with self.assertRaises(ShapeMismatch):
            left.equals(approximate_matrix([[0.1], [0.2]]))

    def test_text_output(self):
        matrix = exact_matrix([[ExactValue(1, 2), 1]])
        self.assertEqual(str(matrix), "[1/2, 1]")
        self.assertEqual(repr(matrix), "FractionMatrix([[ExactValue(1, 2), ExactValue(1, 1)]])")
        self.assertEqual(matrix.to_list(), [[ExactValue(1, 2), ExactValue(1)]])


class FractionMatrixEliminationTests(unittest.TestCase):
    def test_identity_minus(self):
        matrix = exact_matrix([[ExactValue(1, 2), ExactValue(1, 4)], [0, ExactValue(1, 3)]])
        expected = exact_matrix([[ExactValue(1, 2), ExactValue(-1, 4)], [0, ExactValue(2, 3)]])
        self.assertEqual(matrix.identity_minus(), expected)
        with self.assertRaises(ShapeMismatch):
            exact_matrix([[1, 2]]).identity_minus()

    def test_invert_exact(self):
        matrix = exact_matrix([[2, 1], [1, 1]])
        inverse = matrix.invert()
        self.assertEqual(inverse, exact_matrix([[1, -1], [-1, 2]]))
        self.assertTrue(inverse.is_exact())
        self.assertEqual(matrix @ inverse, FractionMatrix.identity(2, fraction_type=ExactValue))

    def test_invert_needs_row_swap(self):
        matrix = exact_matrix([[0, 1], [1, 0]])
        self.assertEqual(matrix.invert(), matrix)

    def test_fundamental_matrix_of_absorbing_chain(self):
        transient = exact_matrix([[0, ExactValue(1, 2)], [ExactValue(1, 2), 0]])
        fundamental = transient.identity_minus().invert()
        expected = exact_matrix([[ExactValue(4, 3), ExactValue(2, 3)], [ExactValue(2, 3), ExactValue(4, 3)]])
        self.assertEqual(fundamental, expected)

    def test_invert_approximate(self):
        matrix = approximate_matrix([[4.0, 7.0], [2.0, 6.0]])
        inverse = matrix.invert()
        self.assertFalse(inverse.is_exact())
        np.testing.assert_allclose(inverse.to_numpy(), [[0.6, -0.7], [-0.2, 0.4]])

    def test_invert_singular(self):
        with self.assertRaises(SingularMatrixError) as ctx:
            exact_matrix([[1, 2], [2, 4]]).invert()
        self.assertIsInstance(ctx.exception, NonRepresentable)
        self.assertEqual(ctx.exception.column, 1)
        with self.assertRaises(SingularMatrixError):
            approximate_matrix([[1.0, 2.0], [2.0, 4.0]]).invert()
        with self.assertRaises(ShapeMismatch):
            exact_matrix([[1, 2]]).invert()

    def test_gauss_jordan(self):
        matrix = exact_matrix([[2, 1], [4, 3]])
        self.assertEqual(matrix.gauss_jordan(), exact_matrix([[2, 1], [0, 1]]))

    def test_gauss_jordan_reduced(self):
        matrix = exact_matrix([[1, 2, 3], [2, 4, 7]])
        self.assertEqual(matrix.gauss_jordan_reduced(), exact_matrix([[1, 2, 0], [0, 0, 1]]))

    def test_conversions(self):
        matrix = exact_matrix([[ExactValue(1, 4), 1]])
        self.assertFalse(matrix.to_approximate().is_exact())
        self.assertTrue(matrix.to_approximate().to_exact().is_exact())
        self.assertEqual(matrix.to_approximate().to_exact(), matrix)
        np.testing.assert_allclose(matrix.to_numpy(), [[0.25, 1.0]])


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
