"""Top level WordLang exceptions"""


class WordLangError(Exception):
    """Base for all WordLang errors"""


class UserResolvableError(WordLangError):
    """An error which the user can probably solve"""

    def __init__(self, msg, suggested_fix=""):
        super().__init__(msg)
        self.msg = msg
        self.suggested_fix = suggested_fix

    def __str__(self):
        if not self.suggested_fix:
            return self.msg
        if type(self) == UserResolvableError:
            return f"{self.msg}\n\n{self.suggested_fix}"
        else:
            return f"{self.__doc__}: {self.msg}\n\n{self.suggested_fix}"


class WordLangSyntaxError(UserResolvableError):
    """Syntax error"""

    def __init__(self, msg, line):
        super().__init__(msg)
        self.line = line

    def __str__(self):
        return f"(line {self.line}) {self.msg}"


class UnexpectedError(WordLangError):
    """An error which is unexpected and with no obvious solution"""

    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        if type(self) == UnexpectedError:
            return self.msg
        else:
            return f"{self.__doc__}:\n{self.msg}"


class InternalError(UnexpectedError):
    """Internal invariant violated"""
