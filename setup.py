import setuptools
from setuptools import setup

setup(
	name='osmpoints',
	version='0.1.0',
	description='Streaming converter of OpenStreetMap XML nodes into a binary point stream with bounding box metadata.',
	license='GNU GPLv3',
	packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
	package_data={'osmpoints': ['*.yaml']},
	install_requires=[
		'numpy',
		'tqdm',
		'pyyaml',
	],
	extras_require={
		'test': [
			'pytest',
			'pytest-mock',
		],
	},
	entry_points={
		'console_scripts': [
			'osmpoints=osmpoints.cli:main',
			'osmpoints-dump=osmpoints.cli:dump_main',
		],
	},
	python_requires='>=3.10'
)
