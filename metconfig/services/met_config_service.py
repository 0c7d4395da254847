from sqlalchemy import or_
from sqlalchemy.orm import Session

from metconfig.config import TOOLS, COMMON_LINETYPE
from metconfig.models import MetConfigEntry


class MetConfigService:
    def __init__(self, session: Session):
        self.session = session

    def _check_tool(self, tool):
        if tool not in TOOLS:
            raise ValueError(f"Unknown tool '{tool}', expected one of {TOOLS}")

    def _version_filter(self, query, version):
        # Rows without a version apply to every MET version
        if version is None:
            return query
        return query.filter(or_(MetConfigEntry.version.is_(None),
                                MetConfigEntry.version <= version))

    def get_all_entries(self):
        """Returns every configuration row in workbook order."""
        return self.session.query(MetConfigEntry).order_by(MetConfigEntry.id).all()

    def get_tools(self):
        """Returns the tool names present in the store."""
        rows = (self.session.query(MetConfigEntry.tool)
                .filter(MetConfigEntry.tool.isnot(None))
                .distinct()
                .order_by(MetConfigEntry.tool)
                .all())
        return [r.tool for r in rows]

    def get_linetypes(self, tool, version=None, supported_only=False):
        """
        Returns the line types written by a tool, in workbook order.

        The COMMON pseudo line type is left out. With a version, only line
        types that existed in that MET version are returned.
        """
        self._check_tool(tool)
        query = (self.session.query(MetConfigEntry)
                 .filter(MetConfigEntry.tool == tool)
                 .filter(MetConfigEntry.linetype.isnot(None))
                 .filter(MetConfigEntry.linetype != COMMON_LINETYPE))
        query = self._version_filter(query, version)
        if supported_only:
            query = query.filter(MetConfigEntry.supported.is_(True))

        linetypes = []
        for entry in query.order_by(MetConfigEntry.id):
            if entry.linetype not in linetypes:
                linetypes.append(entry.linetype)
        return linetypes

    def get_linetype_columns(self, tool, linetype, version):
        """
        Returns the entries describing one output line.

        A line of a given type holds the tool's COMMON header columns
        followed by the line type's own columns, limited to those present
        in the given MET version.
        """
        self._check_tool(tool)
        query = (self.session.query(MetConfigEntry)
                 .filter(MetConfigEntry.tool == tool)
                 .filter(MetConfigEntry.linetype.in_([COMMON_LINETYPE, linetype])))
        query = self._version_filter(query, version)
        entries = query.order_by(MetConfigEntry.id).all()

        common = [e for e in entries if e.linetype == COMMON_LINETYPE]
        own = [e for e in entries if e.linetype != COMMON_LINETYPE]
        return common + own

    def get_column_names(self, tool, linetype, version):
        """Returns the column names of one output line, in order."""
        return [e.name for e in self.get_linetype_columns(tool, linetype, version)]

    def get_datatypes(self, tool, linetype, version):
        """Returns {column name: data type name} for one output line."""
        return {e.name: e.datatype for e in self.get_linetype_columns(tool, linetype, version)}

    def is_supported(self, tool, linetype):
        """True when any row of the line type is flagged as supported."""
        self._check_tool(tool)
        entry = (self.session.query(MetConfigEntry)
                 .filter(MetConfigEntry.tool == tool)
                 .filter(MetConfigEntry.linetype == linetype)
                 .filter(MetConfigEntry.supported.is_(True))
                 .first())
        return entry is not None
