# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

sys.path.insert(0, os.path.abspath(".."))

import docswitch  # noqa: E402

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information

project = "docswitch"
version = os.getenv("SPHINX_VERSION", "dev")
release = os.getenv("SPHINX_RELEASE", docswitch.__version__)

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "sphinx_copybutton",
    "sphinx_autodoc_typehints",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

add_module_names = False

# -- Options for HTML output -------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#options-for-html-output

html_theme = "pydata_sphinx_theme"
html_title = f"{project} Documentation"
html_last_updated_fmt = "%b %d, %Y"
html_context = {"default_mode": "light"}

# The switcher manifest lives at the bucket root, next to the version directories,
# and is written by `docswitch publish`.
_domain = os.getenv("SPHINX_DOMAIN")
html_theme_options = {
    "collapse_navigation": True,
    "navbar_end": ["version-switcher", "theme-switcher", "navbar-icon-links"],
    "secondary_sidebar_items": ["page-toc"],
    "switcher": {
        "json_url": f"https://{_domain}/versions.json" if _domain else "../versions.json",
        "version_match": version,
    },
    "check_switcher": bool(_domain),
}

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "requests": ("https://requests.readthedocs.io/en/latest", None),
}

autodoc_default_options = {
    "members": True,
    "special-members": "__init__",
}
