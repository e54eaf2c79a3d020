"""
Example: Solving an LP from arrays with highsmodel

This example builds a model from a constraint matrix and bound vectors
and solves it with HiGHS.

Problem:
    minimize    -3*x1 - 5*x2
    subject to   x1 + 2*x2 <= 10
                3*x1 +  x2 <= 12
                 x1, x2 >= 0
"""

import numpy as np
from scipy import sparse
import highsmodel


def main():
    print()
    print("=" * 70)
    print("highsmodel Example: Direct LP from Arrays")
    print("=" * 70)
    print()

    print("Problem: minimize -3*x1 - 5*x2")
    print("         subject to x1 + 2*x2 <= 10")
    print("                    3*x1 + x2 <= 12")
    print("                    x1, x2 >= 0")
    print()

    # Constraint matrix; any scipy sparse format or a dense array works
    A = sparse.csr_matrix([
        [1.0, 2.0],  # x1 + 2*x2 <= 10
        [3.0, 1.0]   # 3*x1 + x2 <= 12
    ])

    # Row bounds
    AL = np.array([-np.inf, -np.inf])
    AU = np.array([10.0, 12.0])

    # Column bounds; a missing upper side defaults to +inf
    l = np.array([0.0, 0.0])
    u = None

    c = np.array([-3.0, -5.0])

    # Step 1: Create model from arrays
    print("Creating model from arrays...")
    model = highsmodel.Model.from_arrays(A, AL, AU, l, u, c)
    print(f"Model created: {model!r}")
    print()

    # Step 2: Set parameters
    param = highsmodel.Parameters()
    param.suppress_output = False
    param.log_level = 'INFO'

    # Step 3: Solve the model; the backend is released when solve returns
    result = model.solve(param)

    # Step 4: Display results
    print()
    print(result)
    print()
    print("Primal solution:")
    print(f"  x1 = {result.col_primal[0]:.6f}")
    print(f"  x2 = {result.col_primal[1]:.6f}")
    if result.has_duals():
        print("Row duals:")
        for i, y in enumerate(result.row_dual):
            print(f"  y{i + 1} = {y:.6f}")
    if result.has_basis():
        print("Row basis: " + ", ".join(s.name for s in result.row_basis))
    print()
    print("=" * 70)
    print()


if __name__ == "__main__":
    try:
        main()
    except ImportError as e:
        print(f"Error: {e}")
        print("\nPlease install highsmodel first:")
        print("  python -m pip install .")
    except highsmodel.HighsModelError as e:
        print(f"Error: {e}")
