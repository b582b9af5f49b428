from clangd_cdb.database import CompilationDatabaseIndex
from clangd_cdb.models import CoverageRow, ResolutionRow, ResolutionStatus
from clangd_cdb.resolver import is_none_value
from clangd_cdb.service import CompileCommandsService


class ResolutionReportService:
    def __init__(self, service: CompileCommandsService, index: CompilationDatabaseIndex | None = None) -> None:
        self.service = service
        self.index = index or CompilationDatabaseIndex(service)

    def resolve_row(self, file_path: str) -> ResolutionRow:
        configured = self.service.get_compilation_database(file_path)
        database = self.service.find_compile_commands(file_path)
        if database is not None:
            status = ResolutionStatus.FOUND
        elif is_none_value(configured):
            status = ResolutionStatus.DISABLED
        else:
            status = ResolutionStatus.NOT_FOUND
        return ResolutionRow(
            file=file_path,
            configured=configured,
            database=str(database) if database is not None else None,
            status=status,
        )

    def build_resolution(self, files: list[str]) -> list[ResolutionRow]:
        return [self.resolve_row(file_path) for file_path in files]

    def build_coverage(self, files: list[str]) -> list[CoverageRow]:
        rows: list[CoverageRow] = []
        for file_path in files:
            database = self.service.find_compile_commands(file_path)
            rows.append(
                CoverageRow(
                    file=file_path,
                    database=str(database) if database is not None else None,
                    listed=self.index.contains(file_path),
                )
            )
        return rows
