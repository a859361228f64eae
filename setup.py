# Copyright 2016 Uri Laserson
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from setuptools import setup, find_packages

def readme():
    with open('README.md', 'r') as ip:
        return ip.read()

setup(
    name='seqsplit',
    version='0.1.0.dev0',
    description='Split FASTA/FASTQ files by size, parts, ID or region',
    long_description=readme(),
    long_description_content_type='text/markdown',
    author='Laserson Lab',
    license='Apache License, Version 2.0',
    classifiers=['Programming Language :: Python :: 3'],
    packages=find_packages(exclude=['test']),
    install_requires=['click', 'tqdm', 'biopython'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.7',
    entry_points={'console_scripts': ['seqsplit = seqsplit.cli:cli']}
)
