"""
Default modifiers, grouped by category.

Modifiers are declarations only: they describe which types they accept,
which type they produce and which arguments they take. Executing them
against live data is the renderer's job.

Usage: @post(title).truncate(50).append("...")
"""

from dyntags.tags.catalog.base import (
    ALL_TYPES,
    ArgType,
    Modifier,
    ModifierArg,
    ReturnType,
)

TEXT = ReturnType.TEXT
NUMBER = ReturnType.NUMBER
DATE = ReturnType.DATE
BOOLEAN = ReturnType.BOOLEAN
LIST = ReturnType.LIST

CURRENCIES = ('default', 'USD', 'EUR', 'GBP', 'JPY', 'CAD', 'AUD', 'CHF', 'CNY', 'INR')

DATE_FORMATS = (
    'Y-m-d',
    'F j, Y',
    'M j, Y',
    'd/m/Y',
    'm/d/Y',
    'l, F j, Y',
    'relative',
    'H:i:s',
    'Y-m-d H:i:s',
)


def _value_arg(label: str = 'Value') -> ModifierArg:
    return ModifierArg('value', label, ArgType.TEXT, default='')


# Text

TEXT_MODIFIERS = (
    Modifier(
        key='append',
        label='Append text',
        accepted_types=(TEXT, NUMBER, DATE),
        output_type=TEXT,
        args=(ModifierArg('text', 'Text to append', ArgType.TEXT, default=''),),
        category='text',
    ),
    Modifier(
        key='prepend',
        label='Prepend text',
        accepted_types=(TEXT, NUMBER, DATE),
        output_type=TEXT,
        args=(ModifierArg('text', 'Text to prepend', ArgType.TEXT, default=''),),
        category='text',
    ),
    Modifier(
        key='capitalize',
        label='Capitalize',
        accepted_types=(TEXT,),
        output_type=TEXT,
        category='text',
    ),
    Modifier(
        key='fallback',
        label='Fallback',
        accepted_types=ALL_TYPES,
        output_type=None,
        args=(ModifierArg('text', 'Fallback text', ArgType.TEXT, default='',
                          description='Value to use if empty'),),
        category='text',
    ),
    Modifier(
        key='truncate',
        label='Truncate text',
        accepted_types=(TEXT,),
        output_type=TEXT,
        args=(ModifierArg('length', 'Max length', ArgType.NUMBER, default=50),),
        category='text',
    ),
    Modifier(
        key='replace',
        label='Replace text',
        accepted_types=(TEXT,),
        output_type=TEXT,
        args=(
            ModifierArg('search', 'Search', ArgType.TEXT, required=True,
                        description='Text to search for'),
            ModifierArg('replace', 'Replace with', ArgType.TEXT, default=''),
        ),
        category='text',
    ),
)

# Number

NUMBER_MODIFIERS = (
    Modifier(
        key='currency_format',
        label='Currency format',
        accepted_types=(NUMBER,),
        output_type=TEXT,
        args=(
            ModifierArg('currency', 'Currency', ArgType.ENUM, default='USD', choices=CURRENCIES),
            ModifierArg('in_cents', 'Amount is in cents', ArgType.BOOLEAN, default=False),
        ),
        category='number',
    ),
    Modifier(
        key='number_format',
        label='Number format',
        accepted_types=(NUMBER,),
        output_type=TEXT,
        args=(ModifierArg('decimals', 'Decimals', ArgType.NUMBER, default=0),),
        category='number',
    ),
    Modifier(
        key='round',
        label='Round number',
        accepted_types=(NUMBER,),
        output_type=NUMBER,
        args=(ModifierArg('decimals', 'Decimals', ArgType.NUMBER, default=0),),
        category='number',
    ),
    Modifier(
        key='abbreviate',
        label='Abbreviate number',
        accepted_types=(NUMBER,),
        output_type=TEXT,
        category='number',
    ),
)

# Date

DATE_MODIFIERS = (
    Modifier(
        key='date_format',
        label='Date format',
        accepted_types=(DATE,),
        output_type=TEXT,
        args=(ModifierArg('format', 'Date format', ArgType.ENUM, default='Y-m-d', choices=DATE_FORMATS),),
        category='date',
    ),
    Modifier(
        key='time_diff',
        label='Time diff',
        accepted_types=(DATE,),
        output_type=TEXT,
        args=(ModifierArg('timezone', 'Timezone to compare against', ArgType.TEXT, default=''),),
        category='date',
    ),
    Modifier(
        key='to_age',
        label='Get age',
        accepted_types=(DATE,),
        output_type=NUMBER,
        category='date',
    ),
)

# Conditionals

CONTROL_MODIFIERS = (
    Modifier(key='is_empty', label='Is empty', output_type=BOOLEAN, category='control'),
    Modifier(key='is_not_empty', label='Is not empty', output_type=BOOLEAN, category='control'),
    Modifier(
        key='is_equal_to',
        label='Is equal to',
        output_type=BOOLEAN,
        args=(_value_arg(),),
        category='control',
    ),
    Modifier(
        key='is_not_equal_to',
        label='Is not equal to',
        output_type=BOOLEAN,
        args=(_value_arg(),),
        category='control',
    ),
    Modifier(
        key='is_greater_than',
        label='Is greater than',
        accepted_types=(NUMBER, DATE),
        output_type=BOOLEAN,
        args=(_value_arg(), ModifierArg('mode', 'Mode', ArgType.ENUM, default='', choices=('', '>='))),
        category='control',
    ),
    Modifier(
        key='is_less_than',
        label='Is less than',
        accepted_types=(NUMBER, DATE),
        output_type=BOOLEAN,
        args=(_value_arg(), ModifierArg('mode', 'Mode', ArgType.ENUM, default='', choices=('', '<='))),
        category='control',
    ),
    Modifier(
        key='is_between',
        label='Is between',
        accepted_types=(NUMBER, DATE),
        output_type=BOOLEAN,
        args=(
            ModifierArg('start', 'Start', ArgType.TEXT, required=True),
            ModifierArg('end', 'End', ArgType.TEXT, required=True),
        ),
        category='control',
    ),
    Modifier(
        key='is_checked',
        label='Is checked',
        accepted_types=(BOOLEAN,),
        output_type=BOOLEAN,
        category='control',
    ),
    Modifier(
        key='is_unchecked',
        label='Is unchecked',
        accepted_types=(BOOLEAN,),
        output_type=BOOLEAN,
        category='control',
    ),
    Modifier(
        key='contains',
        label='Contains',
        accepted_types=(TEXT, LIST),
        output_type=BOOLEAN,
        args=(_value_arg(),),
        category='control',
    ),
    Modifier(
        key='does_not_contain',
        label='Does not contain',
        accepted_types=(TEXT, LIST),
        output_type=BOOLEAN,
        args=(_value_arg(),),
        category='control',
    ),
    Modifier(
        key='then',
        label='Then',
        accepted_types=(BOOLEAN,),
        output_type=TEXT,
        args=(ModifierArg('content', 'Content', ArgType.TEXT, default=''),),
        category='control',
    ),
    Modifier(
        key='else',
        label='Else',
        accepted_types=(BOOLEAN, TEXT),
        output_type=TEXT,
        args=(ModifierArg('content', 'Content', ArgType.TEXT, default=''),),
        category='control',
    ),
)

DEFAULT_MODIFIERS = TEXT_MODIFIERS + NUMBER_MODIFIERS + DATE_MODIFIERS + CONTROL_MODIFIERS
