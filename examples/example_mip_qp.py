"""
Example: Integer and quadratic models with highsmodel

The same Model type covers LP, MIP and QP; which path the solver takes
depends only on whether variable types or a Hessian are set.
"""

import sys
import highsmodel
from highsmodel import Nonzero, VariableType


def solve_dice():
    """
    Three dice A, B, C with A + 2C = 3B and B > C. Maximize A + B + C.
    """
    model = highsmodel.Model(maximize=True)
    model.col_costs = [1.0, 1.0, 1.0]
    model.set_column_bounds([1.0] * 3, [6.0] * 3)
    model.set_variable_types([VariableType.INTEGER] * 3)
    model.add_dense_row(0.0, [1.0, -3.0, 2.0], 0.0)
    model.add_dense_row(1.0, [0.0, 1.0, -1.0], float('inf'))

    result = model.solve()
    a, b, c = result.col_primal
    print(f"Dice: A={a:.0f} B={b:.0f} C={c:.0f}, sum={result.objective:.0f}")
    return result


def solve_quadratic():
    """
    minimize  x0^2 - x0*x2 + 0.1*x1^2 + x2^2 - x1 - 3*x2
    subject to x0 + x2 <= 2
    """
    model = highsmodel.Model()
    model.col_costs = [0.0, -1.0, -3.0]
    model.add_dense_row(-float('inf'), [1.0, 0.0, 1.0], 2.0)
    # Upper triangle only; the objective carries a factor of 1/2
    model.set_hessian([
        Nonzero(0, 0, 2.0), Nonzero(0, 2, -1.0),
        Nonzero(1, 1, 0.2), Nonzero(2, 2, 2.0),
    ])

    result = model.solve()
    print("QP: x = [" + ", ".join(f"{v:.4f}" for v in result.col_primal) + "]"
          f", objective = {result.objective:.4f}")
    return result


def main():
    print()
    print("=" * 70)
    print("highsmodel Example: MIP and QP")
    print("=" * 70)
    print()

    dice = solve_dice()
    qp = solve_quadratic()

    print()
    return 0 if dice.is_optimal() and qp.is_optimal() else 1


if __name__ == "__main__":
    try:
        exit_code = main()
        sys.exit(exit_code)
    except ImportError as e:
        print(f"Error: {e}")
        print("\nPlease install highsmodel first:")
        print("  python -m pip install .")
        sys.exit(1)
