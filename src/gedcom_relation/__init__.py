"""
gedcom_relation: GEDCOM family trees to relationship-schema JSON.

    from gedcom_relation.core.pipeline import convert_text, convert_file, convert_directory
"""

__version__ = "0.1.0"
