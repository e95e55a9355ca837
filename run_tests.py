#!/usr/bin/env python
import os
import sys

import coverage
import pytest

# Start code coverage collection
cov = coverage.Coverage(
    source=["app"],
    omit=[
        "*/__pycache__/*",
        "*/tests/*",
        "*/migrations/*",
    ],
)
cov.start()

exit_code = pytest.main(["tests", *sys.argv[1:]])

cov.stop()
cov.save()

print("\nCoverage Summary:")
cov.report()

cov_dir = "htmlcov"
os.makedirs(cov_dir, exist_ok=True)
cov.html_report(directory=cov_dir)

# XML report for SonarQube
cov.xml_report(outfile="coverage.xml")

print(f"\nHTML coverage report generated in {cov_dir}/")
print(f"XML coverage report generated in {os.path.abspath('coverage.xml')}")

sys.exit(int(exit_code))
