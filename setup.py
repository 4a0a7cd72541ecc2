from setuptools import setup, find_packages

with open('README.md', 'r') as readme:
    long_description = readme.read()

setup(
    name='bezline', 
    version='1.0.0', 
    description='Fast sampling of Bézier curves and random control points synthesis.', 
    long_description=long_description, 
    long_description_content_type='text/markdown', 
    packages=find_packages(exclude=['tests', 'tests.*']), 
    install_requires=['numpy', 'numba', 'matplotlib', 'tqdm'], 
    extras_require={'test': ['pytest', 'scipy']}, 
    classifiers=['Programming Language :: Python :: 3', 
                 'Operating System :: OS Independent'], 
    
)
