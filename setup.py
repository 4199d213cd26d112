from setuptools import setup, find_packages


setup(name='fieldstars',
      version='1.0.0',
      description='Selection and ranking of catalog comparison stars for differential photometry',
      python_requires='>=3.11',
      packages=find_packages(include=['fieldstars', 'fieldstars.*']),
      install_requires=['numpy', 'pandas'],
      extras_require={'test': ['pytest']})
