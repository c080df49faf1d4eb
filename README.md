# so_survey_analyzer

A small toolkit for exploring developer survey results stored in an Excel
(`.xlsx`) workbook. The first row of the first worksheet holds the questions.
Each later row holds one respondent's answers. Empty cells and cells that read
`NA` count as no answer.

With it you can:

- list the questions. The type of each one (single choice, multiple choice,
  text or numeric) is guessed from keywords in its header text;
- search question texts and answer options, ignoring case;
- count how often each answer was given to a choice question, as counts and as
  percentages of the people who answered it;
- pick out the respondents who gave an answer, and intersect those groups.

It uses only the standard library. That includes its own small `.xlsx` reader,
`so_survey_analyzer.xlsx`.

## Installation

```
pip install .
```

To install the test requirements as well:

```
pip install .[test]
```

## Command line

`so-survey-cli` loads the workbook and then runs one subcommand. `--file`
(`-f`) names the workbook and defaults to `../so_2024_raw.xlsx`. `--version`
(`-V`) prints the version.

```
so-survey-cli --file survey.xlsx structure --limit 10
so-survey-cli --file survey.xlsx structure --filter language
so-survey-cli --file survey.xlsx search remote
so-survey-cli --file survey.xlsx search --options python
so-survey-cli --file survey.xlsx distribution 5 --threshold 20
so-survey-cli --file survey.xlsx subset 5 Remote
so-survey-cli --file survey.xlsx repl
```

- `structure [--limit N] [--filter TERM]` lists the questions with their type
  and the options seen for them.
- `search TERM [--options]` searches question texts. With `--options` it
  searches answer options instead.
- `distribution QUESTION_ID [--threshold PCT]` shows the answer counts, with
  the most frequent answer first. When the threshold is above zero, it also
  lists the answers given by at least that share of respondents.
- `subset QUESTION_ID OPTION` shows how many respondents chose the option and
  lists the first ten of their ids.
- `repl` starts an interactive session with these commands:
  - `list [limit]`
  - `search <term>`
  - `searchopt <term>`
  - `dist <question_id>`
  - `subset <question_id> <option>`
  - `help`
  - `quit` or `exit`

Question ids are zero-based column numbers. If the file cannot be loaded, or
the question is unknown or of the wrong type, the command prints `Error: ...`
to standard error and exits with status 1.

`so-survey-walkthrough` loads a workbook and gives a short tour of the
features. The path is its first argument and defaults to the same file as
above:

```
so-survey-walkthrough survey.xlsx
```

## Library

```python
from so_survey_analyzer.analyzer import SurveyAnalyzer

analyzer = SurveyAnalyzer.from_excel("survey.xlsx")

for question in analyzer.search_questions("remote"):
    print(question.id, question.text, question.question_type)

distribution = analyzer.get_distribution(5)
print(distribution.display())
print(distribution.most_popular())        # (option, count, percentage) or None
print(distribution.above_threshold(20.0))

remote = analyzer.create_subset(5, "Remote")
full_time = analyzer.create_subset(7, "full-time")
print(remote.size(), remote.percentage(), remote.contains_respondent(3))
print(remote.intersect(full_time))
```

A multiple-choice question splits its answers on `;`, or on `,` when there is
no `;`. For such a question, `create_subset` matches every answer that contains
the option text. For other questions the answer must equal the option exactly.

To build a survey from rows you already have in memory, use
`so_survey_analyzer.survey.Survey.from_rows`. It takes a header row followed by
one row per respondent. Questions and answers are the dataclasses `Question`
and `Answer` in `so_survey_analyzer.models`.

Errors are subclasses of `so_survey_analyzer.errors.SurveyError`:

- `ExcelError` means the workbook could not be opened or parsed.
- `DataParsingError` means the workbook has no worksheets.
- `QuestionNotFoundError` means no question has the id asked for.
- `InvalidQuestionTypeError` means a distribution was asked for a text or
  numeric question.

## Limitations

- Only `.xlsx` workbooks are read, and only the first worksheet. Formulas are
  not evaluated; the value stored with a cell is used.
- Text and numeric questions can be listed, searched and used for subsets.
  They have no distribution, and there are no numeric statistics such as
  averages.
- Results are printed as text only. Nothing is written to files or exported.