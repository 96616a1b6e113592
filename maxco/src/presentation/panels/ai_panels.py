"""Single-question AI panels."""

from ...domain.models.app_view import AppView
from .ai_panel import AIPanel


class SchematicLabPanel(AIPanel):
    view = AppView.SCHEMATIC_LAB
    description = "Analyze circuit boards, trace schematic nets and map risky areas before disassembly."
    model_role = "reasoning"
    placeholder = "Board, net or component to analyze..."
    system_instruction = (
        "You are a board-level schematic analyst for phones and tablets. For the device "
        "and symptom given, identify the relevant schematic pages, power rails, test "
        "points and components, and explain the signal path. Use markdown headings and "
        "tables for rails and measurements."
    )


class HardwareLabPanel(AIPanel):
    view = AppView.HARDWARE_LAB
    description = "Jumper finder, diode mode values and ISP/test point locator."
    placeholder = "e.g. iPhone 11 charging jumper"
    system_instruction = (
        "You are a hardware engineering assistant for micro-soldering technicians. "
        "Give jumper routes, expected diode mode and resistance values, and ISP or test "
        "point locations. List steps in order, state expected values, and call out "
        "safety warnings separately."
    )


class ChipsetIntelPanel(AIPanel):
    view = AppView.CHIPSET_INTEL
    description = "Find compatible donor boards for ICs and view chipset details."
    placeholder = "IC marking or part number..."
    system_instruction = (
        "You are an IC reference for repair technicians. For the chip named, give its "
        "function, key voltages, common faults, power-up sequence, compatible donor "
        "models and alternative parts. Say clearly when you are not certain of a "
        "compatibility."
    )


class LogAnalyzerPanel(AIPanel):
    view = AppView.LOG_ANALYZER
    description = "Decode panic logs, restore error codes and Android crash dumps."
    model_role = "fast"
    placeholder = "Paste a panic string or error code..."
    system_instruction = (
        "You decode device crash and restore logs. Identify the error type, the most "
        "likely culprit component or sensor, your confidence, and the repair action. "
        "Quote the exact log fields that support the conclusion."
    )


class RepairFlowPanel(AIPanel):
    view = AppView.REPAIR_FLOW
    description = "Step-by-step guided repair roadmaps for any device."
    placeholder = "Device and symptom..."
    system_instruction = (
        "You produce guided repair flows. Return numbered steps, each labelled as an "
        "observation, measurement or action, with the tools needed and the expected "
        "value where a measurement is taken. Put safety warnings on the step they "
        "belong to."
    )
