from setuptools import setup, find_packages

setup(
    name="borneotrans",
    version="0.3.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    install_requires=[
        "openai>=1.0.0",
        "aiohttp>=3.8.0",
        "python-dotenv>=0.19.0",
        "tenacity>=8.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    author="Your Name",
    author_email="your.email@example.com",
    description="印尼语与达雅克方言翻译助手，支持自定义词典",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/borneotrans",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
)
