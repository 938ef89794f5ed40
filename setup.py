from setuptools import setup

setup(
    name='treerustler',
    version='0.1.0',
    py_modules=[
        'decision_tree',
        'feature_matrix',
        'impurity',
        'split_finder',
        'tree_builder',
        'tree_errors',
    ],
    python_requires='>=3.9',
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
    description='Binary CART decision-tree classifier',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
