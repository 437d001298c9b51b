"""
Interface de linha de comando
"""
import asyncio
import argparse
from typing import Callable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..application.services import FlightSearchService, build_query
from ..domain.models import FlightLeg, SearchQuery, SearchResult
from ..infrastructure.config import Config
from ..infrastructure.factory import FlightSearchServiceFactory
from ..infrastructure.logging_config import configure_logging
from .formatting import format_datetime, format_duration, google_flights_url, price_stats
from .handler import error_payload

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class FindFlightCLI:
    """Interface CLI para a busca de voos ida e volta"""

    def __init__(
        self,
        console: Optional[Console] = None,
        service_factory: Callable[[], FlightSearchService] = FlightSearchServiceFactory.create,
    ):
        self.console = console or Console()
        self._service_factory = service_factory

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Executa a interface CLI e retorna o código de saída"""
        args = self._parse_arguments(argv)
        configure_logging(args.log_level)

        query = build_query(args.origin, args.destination, args.depart, args.return_date)

        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=self.console,
                transient=True,
            ) as progress:
                progress.add_task("Buscando melhores ofertas...", total=None)
                result = asyncio.run(self._search(query))
        except Exception as exc:
            status, payload = error_payload(exc)
            self.console.print(
                Panel.fit(
                    f"[red]{payload['error']}[/red]",
                    title=f"Erro {status}",
                    border_style="red",
                )
            )
            return 1

        if args.json:
            self.console.print_json(data=result.to_payload())
        else:
            self._display_results(result, args.limit)
        return 0

    async def _search(self, query: SearchQuery) -> SearchResult:
        async with self._service_factory() as service:
            return await service.search(query)

    def _parse_arguments(self, argv: Optional[List[str]]) -> argparse.Namespace:
        """Configura e processa argumentos da linha de comando"""
        parser = argparse.ArgumentParser(
            prog="find-flight",
            description="Find Flight - Busca de passagens ida e volta ordenadas por preço",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Exemplos de uso:
  find-flight --origin JFK --destination LAX --depart 2025-06-01 --return 2025-06-10
  python -m find_flight --origin GRU --destination LIS --depart 2025-03-20 --return 2025-04-02 --json
            """
        )

        parser.add_argument("--origin", required=True,
                            help="Código IATA origem (ex: JFK)")
        parser.add_argument("--destination", required=True,
                            help="Código IATA destino (ex: LAX)")
        parser.add_argument("--depart", required=True,
                            help="Data partida YYYY-MM-DD")
        parser.add_argument("--return", dest="return_date", required=True,
                            help="Data retorno YYYY-MM-DD")

        parser.add_argument("--limit", type=int, default=Config.SEARCH_MAX_RESULTS,
                            help="Limite de ofertas exibidas (padrão: %(default)s)")
        parser.add_argument("--json", action="store_true",
                            help="Imprime o JSON {\"offers\": [...]} em vez da tabela")
        parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                            default=Config.LOG_LEVEL if Config.LOG_LEVEL in LOG_LEVELS else "INFO",
                            help="Nível de log (padrão: %(default)s)")

        return parser.parse_args(argv)

    def _display_results(self, result: SearchResult, limit: int):
        """Exibe resultados da busca"""
        if not result.offers:
            self.console.print(
                Panel.fit(
                    "[yellow]Nenhum voo encontrado para estas datas e aeroportos.[/yellow]",
                    title="Sem Resultados",
                    border_style="yellow"
                )
            )
            return

        limited_offers = result.offers[:max(limit, 1)]

        table = Table(show_lines=True, title=f"🛫 Ofertas ordenadas por preço ({len(limited_offers)} de {result.total_found})")

        table.add_column("#", justify="right", width=3)
        table.add_column("Preço", style="bold green", justify="right", width=14)
        table.add_column("Companhia", style="bold cyan", width=10)
        table.add_column("Ida", width=36)
        table.add_column("Volta", width=36)
        table.add_column("Link", width=30)

        for index, offer in enumerate(limited_offers, start=1):
            price = f"{offer.currency or ''} {offer.price}" if offer.price else "N/A"
            airlines = ", ".join(offer.validating_airline_codes) or "Indisponível"
            table.add_row(
                str(index),
                price.strip(),
                airlines,
                self._format_leg(offer.outbound),
                self._format_leg(offer.inbound),
                google_flights_url(offer),
            )

        self.console.print(table)

        stats = price_stats(result.offers)
        if stats:
            currency = result.offers[0].currency or Config.SEARCH_CURRENCY
            stats_text = f"""
📊 **Estatísticas da Busca:**
• Total encontrado: {result.total_found} ofertas
• Mais barato: {currency} {stats.minimum:.2f}
• Mediana: {currency} {stats.median:.2f}
• Mais caro: {currency} {stats.maximum:.2f}
            """
            self.console.print(Panel.fit(stats_text.strip(), title="Resumo", border_style="blue"))

    def _format_leg(self, leg: FlightLeg) -> str:
        if not leg.route_summary:
            return "-"
        return (
            f"{leg.route_summary}\n"
            f"{format_datetime(leg.departure_time)} → {format_datetime(leg.arrival_time)}\n"
            f"{format_duration(leg.duration)} | Paradas: {leg.stops}"
        )


def main():
    """Função principal"""
    cli = FindFlightCLI()
    raise SystemExit(cli.run())


if __name__ == "__main__":
    main()
