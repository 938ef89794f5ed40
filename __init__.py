"""
treerustler

Binary CART decision-tree classifier over real-valued feature matrices and
integer class labels: Gini/entropy impurity, exhaustive threshold search,
recursive partitioning and prediction by tree traversal.
"""
