#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import getpass
import os

from enum import IntEnum, IntFlag, auto

import requests
from dialog import Dialog, ExecutableNotFound
from ruamel.yaml import YAML

from erpnext_installer.erpnext_utils import eprint

MainDialog = None

# Reasonable dialog bounds; used to reduce awkward wrapping in python-dialog
_DIALOG_MIN_WIDTH = 50
_DIALOG_MAX_WIDTH = 140
_DIALOG_MIN_HEIGHT = 7
_DIALOG_MAX_HEIGHT = 30


def _dialog_size_for(text: str) -> tuple[int, int]:
    """Compute a suitable (height, width) for a dialog widget.

    - Width fits the longest line with a small padding.
    - Height accounts for the number of text lines plus button area.
    """
    lines = str(text).splitlines() or [""]
    max_line = max((len(line) for line in lines), default=_DIALOG_MIN_WIDTH)
    width = max(_DIALOG_MIN_WIDTH, min(max_line + 4, _DIALOG_MAX_WIDTH))
    # base height for buttons + borders; add per text line beyond the first
    height = _DIALOG_MIN_HEIGHT + max(0, len(lines) - 1)
    height = max(_DIALOG_MIN_HEIGHT, min(height, _DIALOG_MAX_HEIGHT))
    return height, width


def _dialog_menu_width_for(choices) -> int:
    """Compute a suitable dialog width based on menu choices."""
    max_tag = 0
    max_item = 0
    for ch in choices or []:
        if not (isinstance(ch, (list, tuple)) and len(ch) == 3):
            continue
        max_tag = max(max_tag, len(str(ch[0])))
        max_item = max(max_item, len(str(ch[1]) if ch[1] is not None else ""))
    # approximate spacing between tag and item columns used by dialog
    width = max_tag + 2 + max_item + 8 + 6
    return max(_DIALOG_MIN_WIDTH, min(width, _DIALOG_MAX_WIDTH))


def DialogInit():
    """Create the shared Dialog instance; returns False if the dialog program is unavailable."""
    global MainDialog
    if not MainDialog:
        try:
            MainDialog = Dialog(dialog='dialog', autowidgetsize=True)
        except ExecutableNotFound:
            MainDialog = None
    return MainDialog is not None


class UserInputDefaultsBehavior(IntFlag):
    DefaultsPrompt = auto()
    DefaultsAccept = auto()


class UserInterfaceMode(IntFlag):
    InteractionDialog = auto()
    InteractionInput = auto()


class DialogCanceledException(Exception):
    pass


class BoolOrExtra(IntEnum):
    FALSE = 0
    TRUE = 1
    EXTRA = 2


###################################################################################################
def str2boolorextra(v):
    if isinstance(v, bool):
        return BoolOrExtra.TRUE if v else BoolOrExtra.FALSE
    elif isinstance(v, str):
        if v.lower() in ("yes", "true", "t", "y", "1"):
            return BoolOrExtra.TRUE
        elif v.lower() in ("no", "false", "f", "n", "0"):
            return BoolOrExtra.FALSE
        elif v.lower() in ("b", "back", "p", "previous", "e", "extra"):
            return BoolOrExtra.EXTRA
        else:
            raise ValueError("BoolOrExtra value expected")
    else:
        raise ValueError("BoolOrExtra value expected")


###################################################################################################
# get interactive user response to Y/N question
def YesOrNo(
    question,
    default=None,
    defaultBehavior=UserInputDefaultsBehavior.DefaultsPrompt,
    uiMode=UserInterfaceMode.InteractionDialog | UserInterfaceMode.InteractionInput,
    yesLabel='Yes',
    noLabel='No',
):
    if (uiMode & UserInterfaceMode.InteractionDialog) and (MainDialog is not None):
        defaultYes = (default is not None) and str2boolorextra(default)
        # dialog puts the default-focused button first, so swap labels when defaulting to "no"
        yesLabelTmp = yesLabel.capitalize() if defaultYes else noLabel.capitalize()
        noLabelTmp = noLabel.capitalize() if defaultYes else yesLabel.capitalize()
        _h, _w = _dialog_size_for(str(question))
        reply = MainDialog.yesno(
            str(question),
            yes_label=str(yesLabelTmp),
            no_label=str(noLabelTmp),
            height=_h,
            width=_w,
        )
        if reply == Dialog.ESC:
            raise DialogCanceledException(question)
        if defaultYes:
            reply = 'y' if (reply == Dialog.OK) else 'n'
        else:
            reply = 'n' if (reply == Dialog.OK) else 'y'

    elif uiMode & UserInterfaceMode.InteractionInput:
        if (default is not None) and defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt:
            if str2boolorextra(default):
                questionStr = f"\n{question} (Y / n): "
            else:
                questionStr = f"\n{question} (y / N): "
        else:
            questionStr = f"\n{question} (y / n): "

        while True:
            reply = str(input(questionStr)).lower().strip()
            if len(reply) > 0:
                try:
                    if str2boolorextra(reply) != BoolOrExtra.EXTRA:
                        break
                except ValueError:
                    pass
            elif (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept) and (default is not None):
                break

    else:
        raise RuntimeError("No user interfaces available")

    if (len(reply) == 0) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept):
        reply = "y" if (default is not None) and str2boolorextra(default) else "n"

    return str2boolorextra(reply) == BoolOrExtra.TRUE


###################################################################################################
# get interactive user response
def AskForString(
    question,
    default=None,
    defaultBehavior=UserInputDefaultsBehavior.DefaultsPrompt,
    uiMode=UserInterfaceMode.InteractionDialog | UserInterfaceMode.InteractionInput,
):
    if (uiMode & UserInterfaceMode.InteractionDialog) and (MainDialog is not None):
        _h, _w = _dialog_size_for(str(question))
        code, reply = MainDialog.inputbox(
            str(question),
            init=(
                default
                if (default is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt)
                else ""
            ),
            height=_h,
            width=_w,
        )
        if (code == Dialog.CANCEL) or (code == Dialog.ESC):
            raise DialogCanceledException(question)
        else:
            reply = reply.strip()

    elif uiMode & UserInterfaceMode.InteractionInput:
        reply = str(
            input(
                f"\n{question}{f' ({default})' if default and (defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt) else ''}: "
            )
        ).strip()
        if (len(reply) == 0) and (default is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept):
            reply = default

    else:
        raise RuntimeError("No user interfaces available")

    return reply


###################################################################################################
# get interactive password (without echoing)
def AskForPassword(
    prompt,
    uiMode=UserInterfaceMode.InteractionDialog | UserInterfaceMode.InteractionInput,
):
    if (uiMode & UserInterfaceMode.InteractionDialog) and (MainDialog is not None):
        _h, _w = _dialog_size_for(str(prompt))
        code, reply = MainDialog.passwordbox(str(prompt), insecure=True, height=_h, width=_w)
        if (code == Dialog.CANCEL) or (code == Dialog.ESC):
            raise DialogCanceledException(prompt)

    elif uiMode & UserInterfaceMode.InteractionInput:
        reply = getpass.getpass(prompt=f"{prompt}: ")

    else:
        raise RuntimeError("No user interfaces available")

    return reply


###################################################################################################
# Choose one of many.
# choices - an iterable of (tag, item, status) tuples where status specifies the initial
# selected/unselected state of each entry. No more than one entry should be set to True.
# Without a selected entry the user must pick one of the numbered options; anything else
# (blank, free text, out-of-range numbers) repeats the prompt.
def ChooseOne(
    prompt,
    choices=[],
    defaultBehavior=UserInputDefaultsBehavior.DefaultsPrompt,
    uiMode=UserInterfaceMode.InteractionDialog | UserInterfaceMode.InteractionInput,
):
    validChoices = [x for x in choices if len(x) == 3 and isinstance(x[0], str) and isinstance(x[2], bool)]
    defaulted = next(iter([x for x in validChoices if x[2] is True]), None)

    if (uiMode & UserInterfaceMode.InteractionDialog) and (MainDialog is not None):
        _h, _w = _dialog_size_for(str(prompt))
        _w = max(_w, _dialog_menu_width_for(validChoices))
        while True:
            code, reply = MainDialog.radiolist(
                str(prompt),
                choices=validChoices,
                height=max(_h, 12),
                width=_w,
            )
            if code == Dialog.CANCEL or code == Dialog.ESC:
                raise DialogCanceledException(prompt)
            if reply in [x[0] for x in validChoices]:
                break

    elif uiMode & UserInterfaceMode.InteractionInput:
        index = 0
        for choice in validChoices:
            index = index + 1
            print(
                f"{index}: {choice[0]}{f' - {choice[1]}' if isinstance(choice[1], str) and len(choice[1]) > 0 else ''}"
            )
        while True:
            inputRaw = input(
                f"{prompt}{f' ({defaulted[0]})' if (defaulted is not None) and (defaultBehavior & UserInputDefaultsBehavior.DefaultsPrompt) else ''}: "
            ).strip()
            if (
                (len(inputRaw) == 0)
                and (defaulted is not None)
                and (defaultBehavior & UserInputDefaultsBehavior.DefaultsAccept)
            ):
                reply = defaulted[0]
                break
            elif (len(inputRaw) > 0) and inputRaw.isnumeric():
                inputIndex = int(inputRaw) - 1
                if inputIndex > -1 and inputIndex < len(validChoices):
                    reply = validChoices[inputIndex][0]
                    break

    else:
        raise RuntimeError("No user interfaces available")

    return reply


###################################################################################################
# display a message to the user without feedback
def DisplayMessage(
    message,
    uiMode=UserInterfaceMode.InteractionDialog | UserInterfaceMode.InteractionInput,
):
    reply = False

    if (uiMode & UserInterfaceMode.InteractionDialog) and (MainDialog is not None):
        _h, _w = _dialog_size_for(str(message))
        code = MainDialog.msgbox(str(message), height=_h, width=_w, no_collapse=True)
        if (code == Dialog.CANCEL) or (code == Dialog.ESC):
            raise DialogCanceledException(message)
        else:
            reply = True

    else:
        print(f"{message}")
        reply = True

    return reply


###################################################################################################
def LoadYaml(inputFileName):
    result = None
    if inputFileName and os.path.isfile(inputFileName):
        with open(inputFileName, 'r') as f:
            inYaml = YAML(typ='safe', pure=True)
            result = inYaml.load(f)
    return result


###################################################################################################
# download to file
def DownloadToFile(url, local_filename, debug=False):
    r = requests.get(url, stream=True, allow_redirects=True, timeout=60)
    r.raise_for_status()
    with open(local_filename, 'wb') as f:
        for chunk in r.iter_content(chunk_size=1024):
            if chunk:
                f.write(chunk)
    fExists = os.path.isfile(local_filename)
    fSize = os.path.getsize(local_filename) if fExists else 0
    if debug:
        eprint(f"Download of {url} to {local_filename} {'succeeded' if fExists else 'failed'} ({fSize} bytes)")
    return fExists and (fSize > 0)


##################################################################################################
def InstallerDisplayMessage(
    message,
    uiMode=UserInterfaceMode.InteractionInput | UserInterfaceMode.InteractionDialog,
):
    """Show a message; the installer never needs a reply to these."""
    return DisplayMessage(message, uiMode=uiMode)


def InstallerYesOrNo(
    question,
    default=None,
    defaultBehavior=UserInputDefaultsBehavior.DefaultsPrompt | UserInputDefaultsBehavior.DefaultsAccept,
    uiMode=UserInterfaceMode.InteractionInput | UserInterfaceMode.InteractionDialog,
):
    """Yes/no question. With default=None the user must answer explicitly."""
    return YesOrNo(
        question,
        default=default,
        defaultBehavior=defaultBehavior,
        uiMode=uiMode,
    )


def InstallerAskForString(
    question,
    default=None,
    defaultBehavior=UserInputDefaultsBehavior.DefaultsPrompt | UserInputDefaultsBehavior.DefaultsAccept,
    uiMode=UserInterfaceMode.InteractionInput | UserInterfaceMode.InteractionDialog,
):
    return AskForString(question, default=default, defaultBehavior=defaultBehavior, uiMode=uiMode)


def InstallerAskForPassword(
    question,
    uiMode=UserInterfaceMode.InteractionInput | UserInterfaceMode.InteractionDialog,
):
    """Masked entry: getpass in the terminal, passwordbox in dialog mode."""
    return AskForPassword(question, uiMode=uiMode)


def InstallerChooseOne(
    prompt,
    choices=[],
    defaultBehavior=UserInputDefaultsBehavior.DefaultsPrompt | UserInputDefaultsBehavior.DefaultsAccept,
    uiMode=UserInterfaceMode.InteractionInput | UserInterfaceMode.InteractionDialog,
):
    """Menu selection. choices are (tag, description, selected) tuples."""
    return ChooseOne(prompt, choices=choices, defaultBehavior=defaultBehavior, uiMode=uiMode)
