"""Interactive Titanic survival workbench."""

import logging
from dataclasses import dataclass

from console_ui import ConsoleUI
from csv_util import CsvUtil
from model_manager import SIMULATION_SEED, ModelManager
from workbench_commands import CommandManager, RetCode

logger = logging.getLogger(__name__)

INTRO = "\n".join([
    "############################",
    "## TITANIC SIMULATOR 2014 ##",
    "############################",
    "",
    "Will you survive?",
])


@dataclass
class WorkbenchConfig:
    seed: int = SIMULATION_SEED
    delimiter: str = ","
    has_headers: bool = True


class Workbench:
    """Read-eval-print loop over the workbench commands.

    Args:
        config: WorkbenchConfig
        ui: ConsoleUI to talk to (default: the terminal)
    """

    def __init__(self, config=None, ui=None):
        self.config = config if config is not None else WorkbenchConfig()
        self.ui = ui if ui is not None else ConsoleUI()
        self.manager = ModelManager(seed=self.config.seed)
        self.csv = CsvUtil(delimiter=self.config.delimiter, has_headers=self.config.has_headers)
        self.commands = CommandManager(self.manager, self.ui, self.csv)

    def home_screen(self):
        """Return the table of active models."""
        model_ids = self.manager.model_ids
        lines = [f"-----------------  {len(model_ids)} Active model(s)  ----------------",
                 "\tID\tType\t\tTrained\t\tTraining base size"]
        for model_id in model_ids:
            instance = self.manager.get(model_id)
            if instance.is_trained:
                lines.append(f"\t{model_id}\t{instance.kind.name}\tyes\t\t{instance.training_set_size}")
            else:
                lines.append(f"\t{model_id}\t{instance.kind.name}\tno")
        lines.append(f"---------------- {len(self.manager.registry)} model type(s) implemented --------------------")
        return "\n".join(lines)

    def run(self):
        """Run commands until `exit` or end of input."""
        self.ui.print_message(INTRO)
        self.ui.print_message(self.commands.help_message)
        self.ui.print_message(self.home_screen())

        while True:
            # Input can also run out inside a command that prompts
            try:
                line = self.ui.get_line()
                result = self.commands.execute(line)
            except EOFError:
                logger.debug("End of input")
                return

            if result.code == RetCode.NONE:
                continue
            if result.code == RetCode.SUCCESS:
                self.ui.print_message(self.home_screen())
                self.ui.print_success(result.message)
            elif result.code == RetCode.FAILURE:
                self.ui.print_error(result.message)
            elif result.code == RetCode.EXIT:
                self.ui.print_message(result.message)
                return
