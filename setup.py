from setuptools import setup, find_packages

setup(
    name="project-generator",
    version="0.1.0",
    description="Generate complete project file trees from a description using LLMs",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "project_generator": ["config/*.yaml"],
    },
    install_requires=[
        "click>=8.1",
        "langchain-anthropic>=0.3",
        "langchain-aws>=0.2",
        "langchain-core>=0.3",
        "langchain-google-genai>=2.0",
        "langchain-ollama>=0.2",
        "langchain-openai>=0.3",
        "langgraph>=0.2",
        "pydantic>=2.0",
        "python-dotenv>=1.0",
        "pyyaml>=6.0",
        "typing-extensions>=4.7",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'project-generator=project_generator.cli:cli',
        ],
    },
    python_requires=">=3.9",
)
